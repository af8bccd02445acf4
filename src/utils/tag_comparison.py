"""
Compare agent flags against QA flags in a review export and collect L1 tags.

The input is an already-parsed grid of strings: row 0 is the header, every
other row is one reviewed task. Everything here is a pure function of that
grid; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, model_validator

from .errors import ProcessingError, SchemaError

logger = logging.getLogger(__name__)


EXPECTED_HEADERS = (
    "Task Link",
    "Actioned Date",
    "All Agent Flags",
    "All QA Flags",
    "Agent",
)

# Column positions within a row
TASK_LINK_COL = 0
AGENT_FLAGS_COL = 2
QA_FLAGS_COL = 3
AGENT_COL = 4

FLAG_SEPARATOR = ","
L1_DELIMITER = "::"

Grid = Sequence[Sequence[str]]
MismatchMode = Literal["over", "under"]


class NoMismatch(Enum):
    """Marker for a row whose destination tags are all covered by the source."""

    NONE = "∅"

    def __repr__(self) -> str:
        return "NO_MISMATCH"


NO_MISMATCH = NoMismatch.NONE

# Either a singleton list holding the comma-joined leftover tags, or NO_MISMATCH
MismatchEntry = Union[list[str], NoMismatch]

# (source column, destination column) per mode
_MODE_COLUMNS: dict[str, tuple[int, int]] = {
    "over": (QA_FLAGS_COL, AGENT_FLAGS_COL),
    "under": (AGENT_FLAGS_COL, QA_FLAGS_COL),
}


class AnalysisResults(BaseModel):
    """Result bundle for one analysis run."""

    model_config = ConfigDict(frozen=True)

    data: list[list[str]]
    overtags: list[MismatchEntry]
    undertags: list[MismatchEntry]
    l1_tags: list[str]

    @model_validator(mode="after")
    def check_lengths(self) -> "AnalysisResults":
        rows = max(len(self.data) - 1, 0)
        if not (len(self.overtags) == len(self.undertags) == rows):
            raise ValueError(
                f"mismatch lists must have one entry per data row "
                f"(rows={rows}, overtags={len(self.overtags)}, "
                f"undertags={len(self.undertags)})"
            )
        return self


def is_no_mismatch(entry: MismatchEntry) -> bool:
    """Return True if a mismatch entry is the no-mismatch marker."""
    return entry is NO_MISMATCH


def validate_headers(header: Sequence[str]) -> None:
    """
    Check that a header row matches the expected five-column layout exactly.

    Raises:
        SchemaError: if the row has a different length or any cell differs.
    """
    if len(header) != len(EXPECTED_HEADERS) or tuple(header) != EXPECTED_HEADERS:
        raise SchemaError(f"got header {list(header)!r}")


def filter_rows(content: Grid) -> list[list[str]]:
    """
    Drop data rows whose QA flags cell is empty.

    The header row is always kept. Emptiness means exactly ``""``; a cell
    holding only whitespace is kept.
    """
    if not content:
        return []
    header, rows = content[0], content[1:]
    return [list(header)] + [list(row) for row in rows if row[QA_FLAGS_COL] != ""]


def get_mismatched_tags(content: Grid, mode: MismatchMode = "over") -> list[MismatchEntry]:
    """
    Compute per-row tags found in the destination column but not the source.

    Args:
        content: Filtered grid, header row first.
        mode: ``"over"`` compares agent flags against QA flags (source = QA
              flags); ``"under"`` swaps the two columns.

    Returns:
        One entry per data row. An empty source yields ``[dest]`` verbatim,
        an empty destination yields NO_MISMATCH, otherwise the destination
        tokens missing from the source (order and duplicates kept) joined
        with commas, or NO_MISMATCH when none are missing.

    Example:
        >>> grid = [list(EXPECTED_HEADERS),
        ...         ["url1", "2024-01-01", "Spam::L1A,Other", "Spam::L1A", "agent1"]]
        >>> get_mismatched_tags(grid, "over")
        [['Other']]
        >>> get_mismatched_tags(grid, "under")
        [NO_MISMATCH]
    """
    try:
        source_idx, dest_idx = _MODE_COLUMNS[mode]
    except KeyError:
        raise ValueError(f"Unknown mismatch mode: {mode!r}") from None

    output: list[MismatchEntry] = []
    for row in content[1:]:
        source_col = row[source_idx]
        dest_col = row[dest_idx]

        if source_col == "":
            output.append([dest_col])
        elif dest_col == "":
            output.append(NO_MISMATCH)
        else:
            source_tags = source_col.split(FLAG_SEPARATOR)
            filtered = [tag for tag in dest_col.split(FLAG_SEPARATOR) if tag not in source_tags]
            output.append([FLAG_SEPARATOR.join(filtered)] if filtered else NO_MISMATCH)

    return output


def get_l1_tags(content: Grid) -> list[str]:
    """
    Collect the sorted, unique L1 names from ``category::subcategory`` flags.

    Both flag columns of every data row are scanned. Only the text after the
    first ``::`` is kept, stripped of surrounding whitespace. Flags without
    the delimiter are ignored.

    Example:
        >>> get_l1_tags([list(EXPECTED_HEADERS),
        ...              ["u", "d", "Spam::L1A,Other", "Spam:: L1B ,Spam::L1A", "a"]])
        ['L1A', 'L1B']
    """
    unique_tags: set[str] = set()

    for row in content[1:]:
        for flags in (row[AGENT_FLAGS_COL], row[QA_FLAGS_COL]):
            if not flags:
                continue
            for flag in flags.split(FLAG_SEPARATOR):
                if L1_DELIMITER in flag:
                    unique_tags.add(flag.split(L1_DELIMITER, 1)[1].strip())

    return sorted(unique_tags)


def analyze_grid(content: Grid) -> AnalysisResults:
    """
    Run the full comparison over a parsed grid.

    Raises:
        SchemaError: if the grid is empty or its header row is wrong.
        ProcessingError: if anything fails while filtering or comparing rows.
    """
    if not content:
        raise SchemaError("no header row")
    validate_headers(content[0])

    try:
        filtered = filter_rows(content)
        results = AnalysisResults(
            data=filtered,
            overtags=get_mismatched_tags(filtered, "over"),
            undertags=get_mismatched_tags(filtered, "under"),
            l1_tags=get_l1_tags(filtered),
        )
    except Exception as e:
        logger.debug("Processing failed", exc_info=True)
        raise ProcessingError(str(e)) from e

    logger.info(
        "Analyzed %d of %d data rows: %d L1 tags",
        len(filtered) - 1,
        len(content) - 1,
        len(results.l1_tags),
    )
    return results
