"""
Repository for activity records.

Collects the records produced by the pipeline in arrival order and writes
them out in their flat external shape.
"""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

import pandas as pd

from ..constants import CSVConstants, RecordFields
from ..exceptions import ActivityPipelineError, DataLoadError
from ..models import ActivityRecord

logger = logging.getLogger(__name__)


class ActivityRecordRepository:
    """
    Append-only, ordered store of activity records.

    Records are immutable; the repository only ever appends and never
    reorders.
    """

    def __init__(self, records: Iterable[ActivityRecord] | None = None):
        """
        Initialize the repository.

        Args:
            records: Optional records to start with
        """
        self._records: list[ActivityRecord] = list(records or [])
        self.logger = logging.getLogger(__name__)

    def append(self, record: ActivityRecord) -> None:
        """Append a single record."""
        self._records.append(record)

    def extend(self, records: Iterable[ActivityRecord]) -> None:
        """Append several records, keeping their order."""
        self._records.extend(records)

    @property
    def records(self) -> tuple[ActivityRecord, ...]:
        """All records in arrival order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ActivityRecord]:
        return iter(self._records)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Flatten records into a DataFrame.

        Returns:
            DataFrame with columns accelX, accelY, accelZ, speedEstimate and
            activityLabel, one row per record
        """
        return pd.DataFrame(
            [record.to_flat_record() for record in self._records],
            columns=RecordFields.ordered(),
        )

    def label_counts(self) -> dict[str, int]:
        """Count records per predicted label."""
        if not self._records:
            return {}
        counts = self.to_dataframe()[RecordFields.ACTIVITY_LABEL].value_counts()
        return {str(label): int(count) for label, count in counts.items()}

    def save(self, path: Path) -> Path:
        """
        Write all records to CSV.

        Args:
            path: Destination file; parent directories are created

        Returns:
            The path written

        Raises:
            DataLoadError: If the file cannot be written
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.to_dataframe().to_csv(
                path,
                index=False,
                sep=CSVConstants.DEFAULT_SEPARATOR,
                encoding=CSVConstants.DEFAULT_ENCODING,
            )
            self.logger.info(f"Saved {len(self)} records to {path}")
            return path

        except ActivityPipelineError:
            raise
        except Exception as e:
            raise DataLoadError(f"Failed to save records to {path}: {e}") from e
