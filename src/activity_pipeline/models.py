"""
Data models for the Activity Pipeline package.

This module defines the core data structures that flow through the per-sample
pipeline. Small per-sample value types are frozen dataclasses; the feature
vector and the externally visible record are Pydantic models so they can be
validated and serialized with their external (camelCase) field names.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .constants import FEATURE_ORDER
from .exceptions import ValidationError

# Spectrum is a typed alias for a 1-D numpy array of non-negative magnitudes,
# one per frequency bin.
Spectrum = np.ndarray


@dataclass(frozen=True)
class Vector3:
    """
    A tri-axial (x, y, z) reading.

    Channels are Python floats, so values beyond the float32 range are held
    as given. The classifier rejects feature vectors that do not fit in
    float32 with MalformedInputError.
    """

    x: float
    y: float
    z: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]):
        """
        Build a triple from any three-element sequence.

        Raises:
            ValidationError: If the sequence does not hold exactly three values
        """
        if len(values) != 3:
            raise ValidationError(
                f"{cls.__name__} requires exactly 3 values, got {len(values)}"
            )
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the reading as an (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    def as_array(self) -> np.ndarray:
        """Return the reading as a float64 array of shape (3,)."""
        return np.array(self.as_tuple(), dtype=np.float64)

    def is_finite(self) -> bool:
        """Check that no channel is NaN or infinite."""
        return bool(np.all(np.isfinite(self.as_array())))


@dataclass(frozen=True)
class RawSample(Vector3):
    """One raw accelerometer reading as delivered by the sensor."""


@dataclass(frozen=True)
class FilteredSample(Vector3):
    """A denoised accelerometer reading produced by the noise filter."""


@dataclass
class ChannelState:
    """
    Recursive estimator state of a single channel.

    Attributes:
        estimate: Current denoised value
        covariance: Current error covariance (p)
    """

    estimate: float
    covariance: float


class FeatureVector(BaseModel):
    """Fixed set of scalar features derived from one filtered sample."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    speed_estimate: float = Field(
        ..., alias="speedEstimate", description="Square root of energy"
    )
    energy: float = Field(..., description="Sum of squared filtered values")
    fft_peak: float = Field(..., alias="fftPeak", description="Largest magnitude")
    fft_mean: float = Field(..., alias="fftMean", description="Mean magnitude")
    jerk: float = Field(
        ..., description="Mean absolute difference of consecutive channels"
    )

    def as_dict(self) -> dict[str, float]:
        """Return features keyed by their external names."""
        return self.model_dump(by_alias=True)

    def as_array(self) -> np.ndarray:
        """Return features as a float64 vector in classifier column order."""
        values = self.as_dict()
        return np.array([values[name] for name in FEATURE_ORDER], dtype=np.float64)


@dataclass(frozen=True)
class TrainingInstance:
    """A labelled accelerometer triple."""

    sample: RawSample
    label: str


@dataclass(frozen=True)
class TrainingSet:
    """Immutable collection of labelled training instances."""

    instances: tuple[TrainingInstance, ...] = field(default_factory=tuple)

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[float, float, float, str]]) -> "TrainingSet":
        """
        Build a training set from (x, y, z, label) rows.

        Args:
            rows: Iterable of rows holding three readings and a label

        Returns:
            TrainingSet holding one instance per row
        """
        return cls(
            tuple(
                TrainingInstance(RawSample(float(x), float(y), float(z)), str(label))
                for x, y, z, label in rows
            )
        )

    @property
    def labels(self) -> tuple[str, ...]:
        """Sorted distinct labels present in the set."""
        return tuple(sorted({instance.label for instance in self.instances}))

    def __len__(self) -> int:
        return len(self.instances)

    def __iter__(self) -> Iterator[TrainingInstance]:
        return iter(self.instances)


class ActivityRecord(BaseModel):
    """
    Result of one pipeline pass.

    The flat external shape holds the raw reading, the speed estimate and the
    predicted label. The filtered reading and full feature vector travel with
    the record but are excluded from serialization.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    accel_x: float = Field(..., alias="accelX", description="Raw x reading")
    accel_y: float = Field(..., alias="accelY", description="Raw y reading")
    accel_z: float = Field(..., alias="accelZ", description="Raw z reading")
    speed_estimate: float = Field(
        ..., alias="speedEstimate", description="Speed proxy from filtered energy"
    )
    activity_label: str = Field(
        ..., alias="activityLabel", description="Predicted activity label"
    )
    filtered: FilteredSample | None = Field(None, exclude=True)
    features: FeatureVector | None = Field(None, exclude=True)

    def to_flat_record(self) -> dict[str, float | str]:
        """Return the record as a flat dict keyed by external field names."""
        return self.model_dump(by_alias=True)
