"""
Data loading functionality.

This module reads labelled training triples and recorded sample streams from
CSV files.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from ..constants import CSVConstants
from ..exceptions import (
    ActivityPipelineError,
    DataLoadError,
    MalformedInputError,
    ValidationError,
)
from ..models import RawSample, TrainingSet
from ..settings import Settings

logger = logging.getLogger(__name__)


def _read_csv(path: Path, required: list[str]) -> pd.DataFrame:
    """Read a CSV file and verify it holds the required columns."""
    if not path.exists():
        raise DataLoadError(f"File not found: {path}")

    df = pd.read_csv(
        path,
        sep=CSVConstants.DEFAULT_SEPARATOR,
        encoding=CSVConstants.DEFAULT_ENCODING,
    )
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise DataLoadError(f"Missing required columns in {path}: {missing}")
    return df


def _numeric_triples(df: pd.DataFrame, path: Path) -> np.ndarray:
    """Return the x, y, z columns as floats, rejecting non-finite values."""
    columns = list(CSVConstants.SAMPLE_COLUMNS)
    values = (
        df[columns].apply(pd.to_numeric, errors="coerce").to_numpy(dtype=np.float64)
    )
    bad_rows = ~np.isfinite(values).all(axis=1)
    if bad_rows.any():
        first = int(np.argmax(bad_rows))
        raise MalformedInputError(
            f"{int(bad_rows.sum())} rows in {path} hold missing or non-finite "
            f"readings (first at row {first})"
        )
    return values


class TrainingDataLoader:
    """
    Loads the labelled training set.

    The CSV holds one instance per row with columns ``x, y, z, label``.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the loader.

        Args:
            settings: Application settings containing data paths
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)

    def load(self, path: Path | None = None) -> TrainingSet:
        """
        Load training instances from CSV.

        Args:
            path: CSV file to read (defaults to settings.training_file)

        Returns:
            Immutable training set

        Raises:
            DataLoadError: If the file is missing or lacks required columns
            MalformedInputError: If any reading is missing or non-finite
            ValidationError: If any row has no label
        """
        path = path or self.settings.training_file
        required = [*CSVConstants.SAMPLE_COLUMNS, CSVConstants.LABEL_COLUMN]

        try:
            self.logger.info(f"Loading training data from {path}")
            df = _read_csv(path, required)
            values = _numeric_triples(df, path)
            if df[CSVConstants.LABEL_COLUMN].isna().any():
                raise ValidationError(f"Training rows without a label in {path}")
            labels = df[CSVConstants.LABEL_COLUMN].astype(str).str.strip()

            training_set = TrainingSet.from_rows(
                (x, y, z, label)
                for (x, y, z), label in zip(values, labels, strict=True)
            )
            self.logger.info(
                f"Loaded {len(training_set)} training instances "
                f"({len(training_set.labels)} labels)"
            )
            return training_set

        except ActivityPipelineError:
            raise
        except Exception as e:
            raise DataLoadError(f"Failed to load training data: {e}") from e


class SampleLoader:
    """
    Loads a recorded accelerometer stream.

    The CSV holds one reading per row with columns ``x, y, z``, in arrival
    order. Any other columns (timestamps, for instance) are ignored.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the loader.

        Args:
            settings: Application settings containing data paths
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)

    def load(self, path: Path | None = None) -> list[RawSample]:
        """
        Load raw samples from CSV.

        Args:
            path: CSV file to read (defaults to settings.samples_file)

        Returns:
            Samples in file order

        Raises:
            DataLoadError: If the file is missing or lacks required columns
            MalformedInputError: If any reading is missing or non-finite
        """
        path = path or self.settings.samples_file

        try:
            self.logger.debug(f"Loading samples from {path}")
            df = _read_csv(path, list(CSVConstants.SAMPLE_COLUMNS))
            values = _numeric_triples(df, path)
            samples = [RawSample(float(x), float(y), float(z)) for x, y, z in values]
            self.logger.info(f"Loaded {len(samples)} samples")
            return samples

        except ActivityPipelineError:
            raise
        except Exception as e:
            raise DataLoadError(f"Failed to load samples: {e}") from e
