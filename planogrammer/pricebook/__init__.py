"""Price-book ingestion: line parsing and catalog construction."""

from .builder import CatalogBuildError, build_catalog
from .parser import parse_line

__all__ = [
    "CatalogBuildError",
    "build_catalog",
    "parse_line",
]
