"""
Analysis service: load a flag review export and run the tag comparison.

Every run returns an ``AnalysisOutcome`` holding either the results or a
single user-facing error message, never both.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from config.settings import AnalyzerConfig, config
from src.loaders.csv_loader import CsvLoader, CsvSource
from src.utils.errors import TagAnalysisError
from src.utils.tag_comparison import AnalysisResults, MismatchEntry, analyze_grid, is_no_mismatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Snapshot of one analysis run."""

    results: Optional[AnalysisResults] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.results is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form: ``{"results": ...}`` or ``{"error": ...}``."""
        if self.error is not None:
            return {"error": self.error}
        if self.results is None:
            return {}
        return {"results": self.results.model_dump(mode="json")}


class AnalysisService:
    """Runs the loader and the tag comparison for one file at a time."""

    def __init__(self, analyzer_config: Optional[AnalyzerConfig] = None):
        self.config = analyzer_config or config.analyzer
        self.loader = CsvLoader(encoding=self.config.encoding, delimiter=self.config.delimiter)

    def analyze(self, source: CsvSource, name: str = "<upload>") -> AnalysisOutcome:
        """
        Parse and analyze a CSV source.

        Args:
            source: Path, stream, bytes or CSV text
            name: Label used in log messages

        Returns:
            AnalysisOutcome with results on success, or an error message
        """
        try:
            grid = self.loader.load(source)
            results = analyze_grid(grid)
        except TagAnalysisError as e:
            logger.warning("Analysis of %s failed: %s", name, e)
            if e.detail:
                logger.debug("Detail: %s", e.detail)
            return AnalysisOutcome(error=str(e))

        logger.info(
            "Analyzed %s: %d rows, %d L1 tags",
            name,
            len(results.data) - 1,
            len(results.l1_tags),
        )
        return AnalysisOutcome(results=results)

    def format_entry(self, entry: MismatchEntry) -> str:
        """Display text for one overtag/undertag entry."""
        if is_no_mismatch(entry):
            return self.config.none_label
        return entry[0]
