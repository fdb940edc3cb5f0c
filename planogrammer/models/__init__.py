"""Domain models for the planogram builder.

Records and the catalog come from a price-book load; the planogram holds the
user's shelf arrangement.
"""

from .catalog import REJECT_DUPLICATE, REJECT_SHORT, Catalog, Rejection
from .config_models import AppConfig, DiagnosticsConfig
from .error_record import ErrorRecord
from .load_result import LoadResult
from .planogram import Planogram, Shelf, normalize_code
from .record import RECORD_SCHEMA, Record

__all__ = [
    # Configuration models
    "AppConfig",
    "DiagnosticsConfig",
    # Catalog models
    "Catalog",
    "Record",
    "RECORD_SCHEMA",
    "Rejection",
    "REJECT_DUPLICATE",
    "REJECT_SHORT",
    # Planogram models
    "Planogram",
    "Shelf",
    "normalize_code",
    # Diagnostics
    "ErrorRecord",
    "LoadResult",
]
