"""
Shared pytest fixtures for Activity Pipeline tests.

This module provides reusable fixtures for:
- Settings configurations
- Labelled training sets and trained classifiers
- Sample streams
- Temporary CSV files
"""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest
import yaml

from activity_pipeline.classification import ActivityClassifier
from activity_pipeline.models import RawSample, TrainingSet
from activity_pipeline.settings import Settings

# Centre of each synthetic activity cluster (x, y, z)
ACTIVITY_CENTRES = {
    "still": (0.02, 0.01, 0.03),
    "walking": (1.0, 1.3, 0.8),
    "running": (3.0, 3.6, 2.7),
}

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary YAML config file path for testing."""
    return tmp_path / "config.yaml"


@pytest.fixture
def sample_config_dict() -> dict:
    """Provide a sample configuration dictionary."""
    return {
        "process_noise": 1e-4,
        "measurement_noise": 5e-3,
        "n_estimators": 20,
        "random_state": 7,
        "data_dir": "data",
        "training_file": "training.csv",
        "samples_file": "samples.csv",
        "output_dir": "output",
    }


@pytest.fixture
def sample_config_file(tmp_path: Path, sample_config_dict: dict) -> Path:
    """Create a temporary config file with sample data."""
    config_path = tmp_path / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config_dict, f)
    return config_path


@pytest.fixture
def fast_settings() -> Settings:
    """Provide settings with a small ensemble to keep tests quick."""
    return Settings(n_estimators=20, random_state=7)


# ============================================================================
# Data Fixtures - Training
# ============================================================================


@pytest.fixture
def training_rows() -> list[tuple[float, float, float, str]]:
    """
    Provide 30 labelled rows per activity.

    Clusters are tight and far apart so any reasonable classifier separates
    them.
    """
    rng = np.random.default_rng(1234)
    rows = []
    for label, centre in ACTIVITY_CENTRES.items():
        spread = 0.05 * max(max(centre), 0.1)
        points = rng.normal(loc=centre, scale=spread, size=(30, 3))
        rows.extend((float(x), float(y), float(z), label) for x, y, z in points)
    return rows


@pytest.fixture
def training_set(training_rows) -> TrainingSet:
    """Provide a three-activity training set."""
    return TrainingSet.from_rows(training_rows)


@pytest.fixture
def trained_classifier(
    fast_settings: Settings, training_set: TrainingSet
) -> ActivityClassifier:
    """Provide a classifier trained on the three-activity training set."""
    classifier = ActivityClassifier.from_settings(fast_settings)
    classifier.train(training_set)
    return classifier


# ============================================================================
# Data Fixtures - Streams
# ============================================================================


@pytest.fixture
def random_stream() -> list[RawSample]:
    """Provide 1000 finite raw samples spanning all activity ranges."""
    rng = np.random.default_rng(99)
    points = rng.uniform(low=-4.0, high=4.0, size=(1000, 3))
    return [RawSample(float(x), float(y), float(z)) for x, y, z in points]


# ============================================================================
# Temporary File Fixtures
# ============================================================================


@pytest.fixture
def training_csv(tmp_path: Path, training_rows) -> Path:
    """Write the training rows to a CSV file."""
    path = tmp_path / "training.csv"
    pd.DataFrame(training_rows, columns=["x", "y", "z", "label"]).to_csv(
        path, index=False
    )
    return path


@pytest.fixture
def samples_csv(tmp_path: Path) -> Path:
    """Write a short recorded stream (with a timestamp column) to CSV."""
    path = tmp_path / "samples.csv"
    rng = np.random.default_rng(5)
    points = rng.uniform(low=-3.0, high=3.0, size=(50, 3))
    df = pd.DataFrame(points, columns=["x", "y", "z"])
    df.insert(0, "timestamp", np.arange(50) * 20)
    df.to_csv(path, index=False)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"
