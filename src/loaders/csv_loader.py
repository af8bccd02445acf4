"""
CSV loader for flag review exports.

Turns a file path, an upload stream, raw bytes or text into the list-of-rows
grid consumed by ``src.utils.tag_comparison``.
"""

import csv
import io
import logging
from pathlib import Path
from typing import IO, Union

from src.utils.errors import ParseError

logger = logging.getLogger(__name__)

CsvSource = Union[str, bytes, Path, IO[bytes], IO[str]]


class CsvLoader:
    """Decodes delimited text into rows of string cells."""

    def __init__(self, encoding: str = "utf-8", delimiter: str = ","):
        self.encoding = encoding
        self.delimiter = delimiter

    def _decode(self, raw: bytes) -> str:
        """Decode bytes, dropping a leading byte order mark."""
        try:
            text = raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise ParseError(str(e)) from e
        return text.lstrip("\ufeff")

    def _read_text(self, source: CsvSource) -> str:
        """Get the full text of a source."""
        if isinstance(source, Path):
            try:
                return self._decode(source.read_bytes())
            except OSError as e:
                raise ParseError(str(e)) from e
        if isinstance(source, bytes):
            return self._decode(source)
        if isinstance(source, str):
            return source.lstrip("\ufeff")

        data = source.read()
        if isinstance(data, bytes):
            return self._decode(data)
        return data.lstrip("\ufeff")

    def parse_text(self, text: str) -> list[list[str]]:
        """
        Parse CSV text into rows.

        Blank lines (including the one after a trailing newline) produce no
        row. Cells are kept exactly as decoded, without trimming.

        Raises:
            ParseError: if the text is not valid CSV.
        """
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter, strict=True)
        try:
            rows = [row for row in reader if row]
        except csv.Error as e:
            raise ParseError(f"line {reader.line_num}: {e}") from e

        logger.debug("Parsed %d rows", len(rows))
        return rows

    def load(self, source: CsvSource) -> list[list[str]]:
        """
        Load a grid from a path, stream, bytes or text.

        Strings are treated as CSV text; pass a ``Path`` to read a file.

        Raises:
            ParseError: if the source cannot be read or decoded.
        """
        return self.parse_text(self._read_text(source))


def load_csv(source: CsvSource, encoding: str = "utf-8") -> list[list[str]]:
    """Convenience wrapper around ``CsvLoader(encoding).load(source)``."""
    return CsvLoader(encoding=encoding).load(source)
