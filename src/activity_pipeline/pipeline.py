"""
Per-sample activity pipeline.

Wires the stages together for one accelerometer stream:
raw triple -> NoiseFilter -> SpectralAnalyzer -> FeatureExtractor
-> ActivityClassifier -> ActivityRecord.

The pipeline never performs I/O; loading samples and persisting records is
left to the data layer.
"""

import logging
from collections.abc import Iterable, Sequence

from .classification import ActivityClassifier, ClassifierProtocol
from .exceptions import ActivityPipelineError, ProcessingError
from .models import ActivityRecord, RawSample, TrainingSet, Vector3
from .processing import NoiseFilter, SampleFeaturizer
from .settings import Settings

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """
    Runs every incoming sample through the processing stages in order.

    One orchestrator owns one noise filter and therefore serves exactly one
    sample stream; ``process`` must be called by a single writer in arrival
    order. The classifier is owned explicitly and shared with nothing else.
    """

    def __init__(
        self,
        settings: Settings,
        classifier: ClassifierProtocol,
        noise_filter: NoiseFilter | None = None,
        featurizer: SampleFeaturizer | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Application settings
            classifier: Classifier used for prediction (trained or not yet)
            noise_filter: Stream filter (defaults to one built from settings)
            featurizer: Spectral transform and feature extraction (defaults to
                the classifier's own featurizer so training and prediction
                share one feature space)
        """
        self.settings = settings
        self.classifier = classifier
        self.noise_filter = noise_filter or NoiseFilter.from_settings(settings)
        self.featurizer = (
            featurizer
            or getattr(classifier, "featurizer", None)
            or SampleFeaturizer.from_settings(settings)
        )
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PipelineOrchestrator":
        """Build a pipeline with an untrained classifier from settings."""
        featurizer = SampleFeaturizer.from_settings(settings)
        classifier = ActivityClassifier.from_settings(settings, featurizer=featurizer)
        return cls(settings, classifier, featurizer=featurizer)

    def train(self, training_set: TrainingSet) -> None:
        """
        Train the owned classifier.

        Args:
            training_set: Labelled triples

        Raises:
            EmptyTrainingSetError: If the training set is empty
        """
        self.classifier.train(training_set)

    def process(self, raw: RawSample | Sequence[float]) -> ActivityRecord:
        """
        Process one raw sample into an activity record.

        Args:
            raw: Raw (x, y, z) accelerometer reading

        Returns:
            ActivityRecord for this sample

        Raises:
            MalformedInputError: If the reading holds NaN or infinite values
            UntrainedModelError: If the classifier has not been trained
            ProcessingError: If any stage fails unexpectedly
        """
        try:
            if not isinstance(raw, Vector3):
                raw = RawSample.from_sequence(raw)

            filtered = self.noise_filter.update(raw)
            spectrum = self.featurizer.analyzer.transform(filtered)
            features = self.featurizer.extractor.extract(filtered, spectrum)
            label = self.classifier.predict(features)

        except ActivityPipelineError:
            raise
        except Exception as e:
            raise ProcessingError(f"Error processing sample {raw}: {e}") from e

        self.logger.debug(f"Sample {raw.as_tuple()} -> {label}")

        return ActivityRecord(
            accel_x=raw.x,
            accel_y=raw.y,
            accel_z=raw.z,
            speed_estimate=features.speed_estimate,
            activity_label=label,
            filtered=filtered,
            features=features,
        )

    def process_stream(
        self, samples: Iterable[RawSample | Sequence[float]]
    ) -> list[ActivityRecord]:
        """
        Process samples in order, one record per sample.

        Raises:
            ActivityPipelineError: On the first failing sample; records
                produced before it are discarded with the call
        """
        records = [self.process(sample) for sample in samples]
        self.logger.info(f"Processed {len(records)} samples")
        return records
