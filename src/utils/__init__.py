"""Utility modules for the flag review analyzer."""

from .errors import ParseError, ProcessingError, SchemaError, TagAnalysisError
from .tag_comparison import (
    EXPECTED_HEADERS,
    NO_MISMATCH,
    AnalysisResults,
    NoMismatch,
    analyze_grid,
    filter_rows,
    get_l1_tags,
    get_mismatched_tags,
    is_no_mismatch,
    validate_headers,
)

__all__ = [
    "EXPECTED_HEADERS",
    "NO_MISMATCH",
    "AnalysisResults",
    "NoMismatch",
    "analyze_grid",
    "filter_rows",
    "get_l1_tags",
    "get_mismatched_tags",
    "is_no_mismatch",
    "validate_headers",
    "TagAnalysisError",
    "SchemaError",
    "ParseError",
    "ProcessingError",
]
