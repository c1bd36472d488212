"""
Feature extraction from filtered samples and their spectrum.

Features:
- energy: sum of squared filtered values
- speedEstimate: square root of energy
- jerk: mean absolute difference between consecutive channels
- fftPeak: largest spectral magnitude
- fftMean: mean spectral magnitude
"""

import logging
from typing import Protocol

import numpy as np

from ..models import FeatureVector, FilteredSample, Spectrum, Vector3
from ..settings import Settings
from .spectral import SpectralAnalyzer

logger = logging.getLogger(__name__)


class FeatureExtractorProtocol(Protocol):
    """Protocol for feature extractors."""

    def extract(self, filtered: Vector3, spectrum: Spectrum) -> FeatureVector:
        """Derive a feature vector from a filtered sample and its spectrum."""
        ...


class FeatureExtractor:
    """Derives the fixed scalar feature set used for classification."""

    def extract(self, filtered: Vector3, spectrum: Spectrum) -> FeatureVector:
        """
        Compute all features in double precision.

        Args:
            filtered: Denoised (x, y, z) triple
            spectrum: Magnitude spectrum of the windowed triple

        Returns:
            FeatureVector holding energy, speed estimate, jerk and the
            spectral peak and mean
        """
        values = filtered.as_array()
        magnitudes = np.asarray(spectrum, dtype=np.float64)

        energy = float(np.sum(values**2))
        jerk = float(np.mean(np.abs(np.diff(values))))

        if magnitudes.size == 0:
            fft_peak = 0.0
            fft_mean = 0.0
        else:
            fft_peak = float(np.max(magnitudes))
            # Rounding must not lift the mean above the peak
            fft_mean = min(float(np.mean(magnitudes)), fft_peak)

        return FeatureVector(
            speed_estimate=float(np.sqrt(energy)),
            energy=energy,
            fft_peak=fft_peak,
            fft_mean=fft_mean,
            jerk=jerk,
        )


class SampleFeaturizer:
    """
    Turns a single triple into a feature vector.

    Composes the spectral transform and the feature extractor so the
    orchestrator and the classifier's training step share one feature space.
    """

    def __init__(
        self,
        analyzer: SpectralAnalyzer | None = None,
        extractor: FeatureExtractorProtocol | None = None,
    ):
        """
        Initialize the featurizer.

        Args:
            analyzer: Spectral analyzer (defaults to exact-length transform)
            extractor: Feature extractor (defaults to FeatureExtractor)
        """
        self.analyzer = analyzer or SpectralAnalyzer()
        self.extractor = extractor or FeatureExtractor()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SampleFeaturizer":
        """Create a featurizer configured from application settings."""
        return cls(analyzer=SpectralAnalyzer.from_settings(settings))

    def featurize(self, sample: Vector3) -> FeatureVector:
        """Transform a triple and extract its features."""
        spectrum = self.analyzer.transform(sample)
        return self.extractor.extract(sample, spectrum)
