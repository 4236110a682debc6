"""CMSBase - in-memory content store.

Collections of typed fields, items, consistency hooks, and CSV/JSON
import and export.
"""

__version__ = "0.1.0"

from cmsbase.infrastructure.store import CMSStore

__all__ = ["CMSStore", "__version__"]
