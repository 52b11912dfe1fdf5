"""Loading of uploaded delimited tables."""

from .reader import DatasetReadError, EmptyDatasetError, load_dataset

__all__ = [
    "DatasetReadError",
    "EmptyDatasetError",
    "load_dataset",
]
