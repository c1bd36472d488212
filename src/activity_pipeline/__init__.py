"""Activity Pipeline - per-sample accelerometer activity classification."""

__version__ = "0.3.0"

from . import classification, constants, data, exceptions, models, processing
from .classification import ActivityClassifier, ClassifierProtocol
from .data import ActivityRecordRepository, SampleLoader, TrainingDataLoader
from .models import (
    ActivityRecord,
    FeatureVector,
    FilteredSample,
    RawSample,
    TrainingInstance,
    TrainingSet,
)
from .pipeline import PipelineOrchestrator
from .processing import FeatureExtractor, NoiseFilter, SampleFeaturizer, SpectralAnalyzer


def get_version() -> str:
    """Get the current version of activity_pipeline."""
    return __version__


def get_package_info() -> dict[str, str]:
    """Get package information including name and version."""
    return {
        "name": "activity-pipeline",
        "version": __version__,
        "description": "Per-sample accelerometer activity classification",
    }


__all__ = [
    # Version & Info
    "get_version",
    "get_package_info",
    # Models
    "ActivityRecord",
    "FeatureVector",
    "FilteredSample",
    "RawSample",
    "TrainingInstance",
    "TrainingSet",
    # Processing
    "FeatureExtractor",
    "NoiseFilter",
    "SampleFeaturizer",
    "SpectralAnalyzer",
    # Classification
    "ActivityClassifier",
    "ClassifierProtocol",
    # Data Layer
    "ActivityRecordRepository",
    "SampleLoader",
    "TrainingDataLoader",
    # Pipeline
    "PipelineOrchestrator",
    # Modules
    "classification",
    "constants",
    "data",
    "exceptions",
    "models",
    "processing",
]
