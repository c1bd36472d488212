"""
Activity classification with a bagged decision-tree ensemble.

Training featurizes every labelled triple with the shared SampleFeaturizer and
fits a random forest (bootstrap-resampled trees). Prediction maps a
FeatureVector, laid out in FEATURE_ORDER, to one of the training labels.
"""

import logging
import threading
from collections.abc import Iterable
from typing import Protocol

import numpy as np
from sklearn.ensemble import RandomForestClassifier

from ..constants import ClassifierDefaults
from ..exceptions import (
    ActivityPipelineError,
    ClassifierError,
    EmptyTrainingSetError,
    MalformedInputError,
    UntrainedModelError,
)
from ..models import FeatureVector, TrainingSet
from ..processing import SampleFeaturizer
from ..settings import Settings

logger = logging.getLogger(__name__)

# The tree ensemble casts its input to float32
MAX_FEATURE_MAGNITUDE = float(np.finfo(np.float32).max)


class ClassifierProtocol(Protocol):
    """Protocol for pluggable activity classifiers."""

    def train(self, training_set: TrainingSet) -> None:
        """Fit a fresh model on the full training set."""
        ...

    def predict(self, features: FeatureVector) -> str:
        """Return the activity label for one feature vector."""
        ...


class ActivityClassifier:
    """
    Maps feature vectors to activity labels.

    State machine: untrained until the first successful ``train``; every later
    ``train`` replaces the model wholesale. ``train`` is exclusive; ``predict``
    reads an immutable model reference and may run from several threads once
    training has completed.
    """

    def __init__(
        self,
        n_estimators: int = ClassifierDefaults.N_ESTIMATORS,
        max_depth: int | None = None,
        random_state: int | None = ClassifierDefaults.RANDOM_STATE,
        featurizer: SampleFeaturizer | None = None,
    ):
        """
        Initialize an untrained classifier.

        Args:
            n_estimators: Number of trees in the ensemble
            max_depth: Maximum tree depth, or None for fully grown trees
            random_state: Seed for bootstrap sampling and feature selection
            featurizer: Triple-to-features step shared with the pipeline
        """
        self.n_estimators = n_estimators
        self.max_depth = max_depth
        self.random_state = random_state
        self.featurizer = featurizer or SampleFeaturizer()
        self.logger = logging.getLogger(__name__)
        self._model: RandomForestClassifier | None = None
        self._train_lock = threading.Lock()

    @classmethod
    def from_settings(
        cls, settings: Settings, featurizer: SampleFeaturizer | None = None
    ) -> "ActivityClassifier":
        """Create a classifier configured from application settings."""
        return cls(
            n_estimators=settings.n_estimators,
            max_depth=settings.max_depth,
            random_state=settings.random_state,
            featurizer=featurizer or SampleFeaturizer.from_settings(settings),
        )

    @property
    def is_trained(self) -> bool:
        """Whether a model is available for prediction."""
        return self._model is not None

    @property
    def labels(self) -> tuple[str, ...]:
        """
        Labels the current model can return.

        Raises:
            UntrainedModelError: If no model has been trained
        """
        model = self._require_model()
        return tuple(str(label) for label in model.classes_)

    def train(self, training_set: TrainingSet) -> None:
        """
        Fit a new model and replace the current one.

        Args:
            training_set: Labelled triples

        Raises:
            EmptyTrainingSetError: If the set holds no instances. Any existing
                model is kept.
            MalformedInputError: If any instance holds a non-finite reading or
                featurizes outside the float32 range of the ensemble
            ClassifierError: If featurizing or fitting fails unexpectedly. Any
                existing model is kept.
        """
        if len(training_set) == 0:
            raise EmptyTrainingSetError("Cannot train on an empty training set")

        malformed = [i for i in training_set if not i.sample.is_finite()]
        if malformed:
            raise MalformedInputError(
                f"{len(malformed)} training instances hold non-finite readings, "
                f"first: {malformed[0].sample}"
            )

        with self._train_lock:
            try:
                features = self._checked_features(
                    np.vstack(
                        [
                            self.featurizer.featurize(instance.sample).as_array()
                            for instance in training_set
                        ]
                    )
                )
                labels = np.array([instance.label for instance in training_set])

                model = RandomForestClassifier(
                    n_estimators=self.n_estimators,
                    max_depth=self.max_depth,
                    bootstrap=ClassifierDefaults.BOOTSTRAP,
                    random_state=self.random_state,
                )
                model.fit(features, labels)

            except ActivityPipelineError:
                raise
            except Exception as e:
                raise ClassifierError(f"Training failed: {e}") from e

            # Swap only once fitting succeeded
            self._model = model

        self.logger.info(
            f"Trained {self.n_estimators}-tree ensemble on {len(training_set)} "
            f"instances, labels: {list(training_set.labels)}"
        )

    def predict(self, features: FeatureVector) -> str:
        """
        Predict the activity label of one feature vector.

        Args:
            features: Features of one filtered sample

        Returns:
            One of the labels seen during training

        Raises:
            UntrainedModelError: If called before a successful train
            MalformedInputError: If a feature exceeds the float32 range
        """
        model = self._require_model()
        prediction = model.predict(
            self._checked_features(features.as_array().reshape(1, -1))
        )
        return str(prediction[0])

    def predict_many(self, features: Iterable[FeatureVector]) -> list[str]:
        """
        Predict labels for several feature vectors at once.

        Raises:
            UntrainedModelError: If called before a successful train
        """
        model = self._require_model()
        rows = [vector.as_array() for vector in features]
        if not rows:
            return []
        predictions = model.predict(self._checked_features(np.vstack(rows)))
        return [str(label) for label in predictions]

    @staticmethod
    def _checked_features(rows: np.ndarray) -> np.ndarray:
        """
        Ensure every feature row survives the ensemble's float32 cast.

        Raises:
            MalformedInputError: If any value is non-finite or too large
        """
        # NaN fails the comparison as well
        out_of_range = ~np.all(np.abs(rows) <= MAX_FEATURE_MAGNITUDE, axis=1)
        if out_of_range.any():
            first = rows[int(np.argmax(out_of_range))]
            raise MalformedInputError(
                f"{int(out_of_range.sum())} feature vectors exceed the float32 "
                f"range of the tree ensemble, first: {first.tolist()}"
            )
        return rows

    def _require_model(self) -> RandomForestClassifier:
        """Return the current model or raise if there is none."""
        model = self._model
        if model is None:
            raise UntrainedModelError(
                "Activity classifier has not been trained; call train() first"
            )
        return model
