"""
Data access layer.

This package contains the thin I/O adapters around the pipeline: loading
training data and recorded streams, and storing activity records.
"""

from .loader import SampleLoader, TrainingDataLoader
from .repository import ActivityRecordRepository

__all__ = [
    "ActivityRecordRepository",
    "SampleLoader",
    "TrainingDataLoader",
]
