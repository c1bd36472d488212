"""Application settings and configuration management."""

from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import ClassifierDefaults, FilterDefaults


class Settings(BaseSettings):
    """
    Application settings for the Activity Pipeline.

    Settings are loaded in the following order of precedence (highest to lowest):
    1. Values passed explicitly (e.g. from a YAML config file)
    2. Environment variables (e.g., ACTIVITY_PIPELINE_PROCESS_NOISE)
    3. .env file (if found)
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="ACTIVITY_PIPELINE_", env_file=".env", extra="ignore"
    )

    # --- File Paths ---
    data_dir: Path = Path("data")
    training_file: Path | None = None  # Will be set based on data_dir
    samples_file: Path | None = None  # Will be set based on data_dir
    output_dir: Path = Path("output")
    records_file: Path | None = None  # Will be set based on output_dir

    def __init__(self, **data):
        """Initialize the Settings object."""
        super().__init__(**data)
        if self.training_file is None:
            self.training_file = self.data_dir / "training.csv"
        if self.samples_file is None:
            self.samples_file = self.data_dir / "samples.csv"
        if self.output_dir and self.records_file is None:
            self.records_file = self.output_dir / "activity_records.csv"

    # --- Noise Filter ---
    process_noise: float = Field(FilterDefaults.PROCESS_NOISE, gt=0)
    measurement_noise: float = Field(FilterDefaults.MEASUREMENT_NOISE, gt=0)
    initial_covariance: float = Field(FilterDefaults.INITIAL_COVARIANCE, gt=0)
    initial_estimate: float = FilterDefaults.INITIAL_ESTIMATE

    # --- Spectral Analysis ---
    # None transforms the buffer at its exact length; larger values zero-pad
    fft_size: int | None = Field(None, ge=1)

    # --- Classifier ---
    n_estimators: int = Field(ClassifierDefaults.N_ESTIMATORS, ge=1)
    max_depth: int | None = Field(None, ge=1)
    random_state: int | None = ClassifierDefaults.RANDOM_STATE


def load_settings(config_file: Path | None = None) -> Settings:
    """Load settings from a YAML file, environment variables, and defaults."""
    if config_file:
        with open(config_file, encoding="utf-8") as f:
            yaml_settings = yaml.safe_load(f) or {}

        # Relative data_dir is anchored at the config file's directory
        data_dir = Path(yaml_settings.get("data_dir", "")).expanduser()
        if not data_dir.is_absolute():
            data_dir = (config_file.parent / data_dir).resolve()
        if "data_dir" in yaml_settings:
            yaml_settings["data_dir"] = str(data_dir)

        # Join relative input paths with data_dir
        for key in ("training_file", "samples_file"):
            if key in yaml_settings and not Path(yaml_settings[key]).is_absolute():
                yaml_settings[key] = str(data_dir / yaml_settings[key])

        if "output_dir" in yaml_settings:
            output_dir = Path(yaml_settings["output_dir"]).expanduser()
            if not output_dir.is_absolute():
                yaml_settings["output_dir"] = str(
                    (config_file.parent / output_dir).resolve()
                )

        return Settings(**yaml_settings)

    return Settings()
