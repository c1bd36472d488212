"""
Windowed spectral transform.

Applies a Blackman window to a buffer of filtered readings and returns the
magnitude of its discrete Fourier transform.
"""

import logging
from collections.abc import Sequence

import numpy as np
from scipy import fft
from scipy.signal import windows

from ..constants import SpectralDefaults
from ..exceptions import ConfigurationError, ValidationError
from ..models import Spectrum, Vector3
from ..settings import Settings

logger = logging.getLogger(__name__)


class SpectralAnalyzer:
    """
    Computes the magnitude spectrum of a windowed sample buffer.

    The pipeline hands in the filtered (x, y, z) triple, so the buffer holds
    three values by default. ``fft_size`` fixes the transform length: ``None``
    transforms the buffer at its exact length, a larger value zero-pads the
    windowed buffer.
    """

    def __init__(self, fft_size: int | None = None):
        """
        Initialize the analyzer.

        Args:
            fft_size: Transform length, or None for the buffer's own length

        Raises:
            ConfigurationError: If fft_size is not a positive integer
        """
        if fft_size is not None and fft_size < 1:
            raise ConfigurationError(f"fft_size must be positive, got {fft_size}")
        self.fft_size = fft_size
        self._window_cache: dict[int, np.ndarray] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "SpectralAnalyzer":
        """Create an analyzer configured from application settings."""
        return cls(fft_size=settings.fft_size)

    def window(self, length: int) -> np.ndarray:
        """Return the symmetric Blackman window of the given length."""
        if length not in self._window_cache:
            self._window_cache[length] = windows.get_window(
                SpectralDefaults.WINDOW, length, fftbins=False
            )
        return self._window_cache[length]

    def transform(self, samples: Vector3 | Sequence[float] | np.ndarray) -> Spectrum:
        """
        Window the buffer and return its DFT magnitude spectrum.

        Args:
            samples: Filtered triple or any 1-D buffer of readings

        Returns:
            Non-negative magnitudes, one per frequency bin

        Raises:
            ValidationError: If the buffer is empty or not one-dimensional
            ConfigurationError: If fft_size is shorter than the buffer
        """
        if isinstance(samples, Vector3):
            buffer = samples.as_array()
        else:
            buffer = np.asarray(samples, dtype=np.float64)

        if buffer.ndim != 1 or buffer.size == 0:
            raise ValidationError(
                f"Spectral buffer must be a non-empty 1-D sequence, got shape "
                f"{buffer.shape}"
            )

        n = buffer.size if self.fft_size is None else self.fft_size
        if n < buffer.size:
            raise ConfigurationError(
                f"fft_size {n} is shorter than the {buffer.size}-sample buffer"
            )

        windowed = buffer * self.window(buffer.size)
        coefficients = fft.fft(windowed, n=n, norm=SpectralDefaults.FFT_NORM)
        return np.abs(coefficients)
