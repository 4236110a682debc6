"""Exceptions for import and export."""


class CodecError(Exception):
    """Base class for all codec errors."""


class ImportFormatError(CodecError):
    """Raised when import text cannot be parsed.

    Raised before any store mutation, so a failed import leaves the store
    untouched.

    Attributes:
        reason: Machine-readable reason code (``too_few_rows``,
            ``invalid_json`` or ``invalid_bundle``).
    """

    TOO_FEW_ROWS = "too_few_rows"
    INVALID_JSON = "invalid_json"
    INVALID_BUNDLE = "invalid_bundle"

    def __init__(self, message: str, reason: str) -> None:
        self.message = message
        self.reason = reason
        super().__init__(message)
