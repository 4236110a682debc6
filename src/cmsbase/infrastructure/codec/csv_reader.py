"""Character-level CSV tokenizer.

Splits comma-separated text into records with a three-state machine:

- UNQUOTED: plain cell text; a comma ends the cell, a newline ends the
  record, a quote at the start of a cell opens a quoted run
- QUOTED: everything is literal until the next quote
- QUOTE_IN_QUOTED: just read a quote inside a quoted run; another quote
  emits one literal quote, anything else closes the run

Unquoted cell text is trimmed. Quoted text keeps its whitespace,
commas and newlines.
"""

from enum import Enum

DELIMITER = ","
QUOTE = '"'
NEWLINE = "\n"


class ReaderState(str, Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"
    QUOTE_IN_QUOTED = "quote_in_quoted"


class CSVRowReader:
    """Incremental CSV tokenizer.

    Example:
        reader = CSVRowReader()
        reader.feed('Title,Qty\\n"say ""hi"" now",5\\n')
        records = reader.finish()
        # [["Title", "Qty"], ['say "hi" now', "5"]]
    """

    def __init__(self) -> None:
        self.state = ReaderState.UNQUOTED
        self.records: list[list[str]] = []
        self._record: list[str] = []
        self._cell: list[str] = []
        self._quoted = False
        self._quoted_end = 0
        self._handlers = {
            ReaderState.UNQUOTED: self._on_unquoted,
            ReaderState.QUOTED: self._on_quoted,
            ReaderState.QUOTE_IN_QUOTED: self._on_quote_in_quoted,
        }

    def feed(self, text: str) -> None:
        """Consume a chunk of text. CRLF and lone CR count as newlines."""
        for char in text.replace("\r\n", NEWLINE).replace("\r", NEWLINE):
            self._handlers[self.state](char)

    def finish(self) -> list[list[str]]:
        """Flush the pending record and return every record read.

        An unterminated quoted run is closed at end of input.
        """
        if self.state is not ReaderState.UNQUOTED:
            self._close_quoted_run()
        if self._cell or self._record or self._quoted:
            self._emit_record()
        return self.records

    def _on_unquoted(self, char: str) -> None:
        if char == DELIMITER:
            self._emit_cell()
        elif char == NEWLINE:
            self._emit_record()
        elif char == QUOTE and not self._quoted and not "".join(self._cell).strip():
            # Leading whitespace before the opening quote is dropped
            self._cell = []
            self._quoted = True
            self.state = ReaderState.QUOTED
        else:
            self._cell.append(char)

    def _on_quoted(self, char: str) -> None:
        if char == QUOTE:
            self.state = ReaderState.QUOTE_IN_QUOTED
        else:
            self._cell.append(char)

    def _on_quote_in_quoted(self, char: str) -> None:
        if char == QUOTE:
            self._cell.append(QUOTE)
            self.state = ReaderState.QUOTED
        else:
            self._close_quoted_run()
            self._on_unquoted(char)

    def _close_quoted_run(self) -> None:
        self._quoted_end = len(self._cell)
        self.state = ReaderState.UNQUOTED

    def _emit_cell(self) -> None:
        text = "".join(self._cell)
        if self._quoted:
            value = text[: self._quoted_end] + text[self._quoted_end :].rstrip()
        else:
            value = text.strip()
        self._record.append(value)
        self._cell = []
        self._quoted = False
        self._quoted_end = 0

    def _emit_record(self) -> None:
        blank = not self._record and not self._quoted and not "".join(self._cell).strip()
        self._emit_cell()
        if blank:
            self._record = []
            return
        self.records.append(self._record)
        self._record = []


def read_records(text: str) -> list[list[str]]:
    """Tokenize ``text`` into records, skipping blank lines."""
    reader = CSVRowReader()
    reader.feed(text)
    return reader.finish()
