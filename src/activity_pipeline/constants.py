"""
Constants used throughout the Activity Pipeline package.

This module centralizes all magic numbers and commonly used values to improve
maintainability and clarity.
"""

from typing import Final


# === Noise Filter Defaults ===
class FilterDefaults:
    """Default parameters of the per-channel recursive noise filter."""

    PROCESS_NOISE: Final[float] = 1e-4  # q, added to covariance every step
    MEASUREMENT_NOISE: Final[float] = 5e-3  # r, sensor noise variance
    INITIAL_COVARIANCE: Final[float] = 1.0  # p before the first update
    INITIAL_ESTIMATE: Final[float] = 0.0  # biases the first output toward zero

    CHANNELS: Final[tuple[str, ...]] = ("x", "y", "z")


# === Spectral Analysis ===
class SpectralDefaults:
    """Defaults for the windowed spectral transform."""

    WINDOW: Final[str] = "blackman"
    FFT_NORM: Final[str] = "backward"


# === Feature Names ===
class FeatureNames:
    """External (camelCase) feature names."""

    SPEED_ESTIMATE: Final[str] = "speedEstimate"
    ENERGY: Final[str] = "energy"
    FFT_PEAK: Final[str] = "fftPeak"
    FFT_MEAN: Final[str] = "fftMean"
    JERK: Final[str] = "jerk"


# Column order of the numeric vector handed to the classifier, at both train
# and predict time.
FEATURE_ORDER: Final[tuple[str, ...]] = (
    FeatureNames.SPEED_ESTIMATE,
    FeatureNames.ENERGY,
    FeatureNames.FFT_PEAK,
    FeatureNames.FFT_MEAN,
    FeatureNames.JERK,
)


# === Classifier Defaults ===
class ClassifierDefaults:
    """Defaults for the bagged decision-tree ensemble."""

    N_ESTIMATORS: Final[int] = 100
    RANDOM_STATE: Final[int] = 42
    BOOTSTRAP: Final[bool] = True


# === Record Fields ===
class RecordFields:
    """Field names of the flat, externally serialized activity record."""

    ACCEL_X: Final[str] = "accelX"
    ACCEL_Y: Final[str] = "accelY"
    ACCEL_Z: Final[str] = "accelZ"
    SPEED_ESTIMATE: Final[str] = "speedEstimate"
    ACTIVITY_LABEL: Final[str] = "activityLabel"

    @classmethod
    def ordered(cls) -> list[str]:
        """Get the flat record columns in output order."""
        return [
            cls.ACCEL_X,
            cls.ACCEL_Y,
            cls.ACCEL_Z,
            cls.SPEED_ESTIMATE,
            cls.ACTIVITY_LABEL,
        ]


# === CSV Parsing ===
class CSVConstants:
    """Constants for CSV file parsing."""

    DEFAULT_SEPARATOR: Final[str] = ","
    DEFAULT_ENCODING: Final[str] = "utf-8"

    SAMPLE_COLUMNS: Final[tuple[str, ...]] = ("x", "y", "z")
    LABEL_COLUMN: Final[str] = "label"

