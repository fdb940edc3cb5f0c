from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the planogram builder.

Built by ``planogrammer.config.loader`` from ``config/planogram.yml``.
"""

DEFAULT_OUTPUT_DIRECTORY = "./out"
DEFAULT_LOG_DIRECTORY = "./logs"


@dataclass(frozen=True)
class DiagnosticsConfig:
    """Opt-in diagnostics for price-book loads.

    Rejected lines are silently skipped unless ``rejection_log`` is enabled,
    in which case every rejection is written as a JSON line under
    ``log_directory``.
    """
    rejection_log: bool = False
    log_directory: str = DEFAULT_LOG_DIRECTORY


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object."""
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY  # CSV exports land here
    timezone: str = "UTC"  # used for export file name timestamps
    encoding: str = "utf-8"  # price-book text encoding
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
