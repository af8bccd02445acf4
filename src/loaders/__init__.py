"""Loaders that turn review exports into row grids."""

from .csv_loader import CsvLoader, load_csv

__all__ = ["CsvLoader", "load_csv"]
