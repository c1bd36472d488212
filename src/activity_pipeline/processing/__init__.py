"""
Per-sample signal processing stages.

This package contains the numeric stages that run ahead of classification:
- noise_filter: Recursive per-channel denoising
- spectral: Blackman-windowed DFT magnitude spectrum
- features: Scalar feature extraction and the shared featurizer
"""

from .features import FeatureExtractor, FeatureExtractorProtocol, SampleFeaturizer
from .noise_filter import NoiseFilter
from .spectral import SpectralAnalyzer

__all__ = [
    "FeatureExtractor",
    "FeatureExtractorProtocol",
    "NoiseFilter",
    "SampleFeaturizer",
    "SpectralAnalyzer",
]
