"""Tests for the load-and-analyze service."""

from config.settings import AnalyzerConfig
from src.services.analysis_service import AnalysisOutcome, AnalysisService
from src.utils.tag_comparison import NO_MISMATCH


class TestAnalysisService:
    def test_successful_run(self, sample_csv):
        outcome = AnalysisService().analyze(sample_csv)

        assert outcome.ok
        assert outcome.error is None
        results = outcome.results
        assert [row[0] for row in results.data[1:]] == ["url1", "url3"]
        assert results.overtags == [["Other"], NO_MISMATCH]
        assert results.undertags == [NO_MISMATCH, ["Abuse::Hate"]]
        assert results.l1_tags == ["Hate", "L1A"]

    def test_schema_error_clears_results(self, bad_header_csv):
        outcome = AnalysisService().analyze(bad_header_csv)

        assert not outcome.ok
        assert outcome.results is None
        assert outcome.error == "Invalid CSV format. Please check the column headers."

    def test_parse_error_message(self):
        outcome = AnalysisService().analyze(b"\xff\xfe\xfa")
        assert outcome.results is None
        assert outcome.error.startswith("Error parsing CSV: ")

    def test_processing_error_message(self):
        text = "Task Link,Actioned Date,All Agent Flags,All QA Flags,Agent\nurl1,2024-01-01\n"
        outcome = AnalysisService().analyze(text)
        assert outcome.results is None
        assert outcome.error.startswith("Error processing file: ")

    def test_empty_file_is_schema_error(self):
        outcome = AnalysisService().analyze(b"")
        assert outcome.error == "Invalid CSV format. Please check the column headers."

    def test_runs_are_independent(self, sample_csv, bad_header_csv):
        service = AnalysisService()
        first = service.analyze(sample_csv)
        second = service.analyze(bad_header_csv)
        third = service.analyze(sample_csv)

        assert first.ok and not second.ok and third.ok
        assert first.results == third.results

    def test_format_entry(self):
        service = AnalysisService(AnalyzerConfig(none_label="None"))
        assert service.format_entry(NO_MISMATCH) == "None"
        assert service.format_entry(["A,B"]) == "A,B"
        assert service.format_entry([""]) == ""


class TestAnalysisOutcome:
    def test_to_dict_error(self):
        assert AnalysisOutcome(error="boom").to_dict() == {"error": "boom"}

    def test_to_dict_results(self, sample_csv):
        payload = AnalysisService().analyze(sample_csv).to_dict()
        assert payload["results"]["overtags"] == [["Other"], "∅"]
        assert payload["results"]["l1_tags"] == ["Hate", "L1A"]

    def test_empty_outcome(self):
        outcome = AnalysisOutcome()
        assert not outcome.ok
        assert outcome.to_dict() == {}
