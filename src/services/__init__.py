"""Services that run analyses for the CLI and the viewer."""

from .analysis_service import AnalysisOutcome, AnalysisService

__all__ = ["AnalysisOutcome", "AnalysisService"]
