"""
Custom exceptions for the Activity Pipeline package.

This module defines all custom exceptions used throughout the application,
providing clear error hierarchies and specific error types for different scenarios.
"""


class ActivityPipelineError(Exception):
    """Base exception for all Activity Pipeline errors."""


class ConfigurationError(ActivityPipelineError):
    """Raised when there is an issue with configuration settings."""


class ValidationError(ActivityPipelineError):
    """Raised when data validation fails."""


class MalformedInputError(ValidationError):
    """Raised when a sample contains non-finite (NaN or infinite) values."""


class ClassifierError(ActivityPipelineError):
    """Raised when the activity classifier cannot train or predict."""


class UntrainedModelError(ClassifierError):
    """Raised when prediction is requested before a successful training call."""


class EmptyTrainingSetError(ClassifierError):
    """Raised when training is invoked with zero instances."""


class ProcessingError(ActivityPipelineError):
    """Raised when there is an unexpected error while processing a sample."""


class DataLoadError(ActivityPipelineError):
    """Raised when there is an error loading data files."""
