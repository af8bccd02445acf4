"""
Errors raised while loading and analyzing a flag review export.

Each error carries the message shown to the user, so callers can surface
``str(exc)`` directly.
"""


class TagAnalysisError(Exception):
    """Base class for failures that end an analysis run."""

    message = "Error analyzing file"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class SchemaError(TagAnalysisError):
    """Header row does not match the expected five-column layout."""

    message = "Invalid CSV format. Please check the column headers."

    def __init__(self, detail: str = ""):
        # The banner text is fixed; the offending header only goes to the log.
        self.detail = detail
        Exception.__init__(self, self.message)


class ParseError(TagAnalysisError):
    """The uploaded file could not be decoded into rows."""

    message = "Error parsing CSV"


class ProcessingError(TagAnalysisError):
    """Unexpected failure while computing mismatches or L1 tags."""

    message = "Error processing file"
