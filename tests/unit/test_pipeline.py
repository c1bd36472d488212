"""Unit tests for the per-sample pipeline orchestrator."""

import math

import pytest

from activity_pipeline.classification import ActivityClassifier
from activity_pipeline.exceptions import (
    MalformedInputError,
    ProcessingError,
    UntrainedModelError,
)
from activity_pipeline.models import ActivityRecord, FeatureVector, RawSample
from activity_pipeline.pipeline import PipelineOrchestrator
from activity_pipeline.processing import NoiseFilter
from activity_pipeline.settings import Settings


class ExplodingClassifier:
    """Classifier stub whose predict fails with a non-pipeline error."""

    def train(self, training_set) -> None:
        """Accept any training set."""

    def predict(self, features: FeatureVector) -> str:
        """Fail unexpectedly."""
        raise RuntimeError("model backend unavailable")


@pytest.fixture
def pipeline(fast_settings: Settings, trained_classifier) -> PipelineOrchestrator:
    """Provide a pipeline around the trained classifier."""
    return PipelineOrchestrator(fast_settings, trained_classifier)


class TestProcess:
    """Test processing of single samples."""

    def test_record_fields(self, pipeline: PipelineOrchestrator, training_set):
        """Test that a record carries the raw reading and a known label."""
        record = pipeline.process(RawSample(0.5, 0.3, 0.7))

        assert isinstance(record, ActivityRecord)
        assert (record.accel_x, record.accel_y, record.accel_z) == (0.5, 0.3, 0.7)
        assert record.activity_label in training_set.labels

    def test_speed_estimate_from_filtered_sample(self, pipeline):
        """The speed estimate is derived from the filtered triple."""
        record = pipeline.process(RawSample(0.5, 0.3, 0.7))

        filtered = record.filtered
        expected = math.sqrt(filtered.x**2 + filtered.y**2 + filtered.z**2)
        assert record.speed_estimate == pytest.approx(expected)
        assert record.features.speed_estimate == record.speed_estimate

    def test_first_sample_filtered_toward_zero(self, pipeline):
        """The first filtered value is close to but not equal to the raw one."""
        record = pipeline.process(RawSample(0.5, 0.3, 0.7))

        assert record.filtered.x == pytest.approx(0.5, abs=0.01)
        assert record.filtered.x != 0.5

    def test_accepts_plain_tuple(self, pipeline):
        """Test that a plain 3-tuple is accepted."""
        record = pipeline.process((1.0, 1.3, 0.8))

        assert record.accel_y == 1.3

    def test_converged_stream_labelled(self, pipeline):
        """A steady running-level stream is labelled running once settled."""
        records = [pipeline.process(RawSample(3.0, 3.6, 2.7)) for _ in range(20)]

        assert records[-1].activity_label == "running"

    def test_flat_record_shape(self, pipeline):
        """Test the externally serialized record shape."""
        flat = pipeline.process(RawSample(0.5, 0.3, 0.7)).to_flat_record()

        assert list(flat) == [
            "accelX",
            "accelY",
            "accelZ",
            "speedEstimate",
            "activityLabel",
        ]
        assert isinstance(flat["activityLabel"], str)


class TestProcessStream:
    """Test processing of whole streams."""

    def test_one_record_per_sample(self, pipeline, random_stream, training_set):
        """1000 samples produce exactly 1000 records with known labels."""
        records = pipeline.process_stream(random_stream)

        assert len(records) == 1000
        assert {r.activity_label for r in records} <= set(training_set.labels)
        assert [r.accel_x for r in records] == [s.x for s in random_stream]

    def test_filter_state_advances(self, pipeline, random_stream):
        """Test that the filter absorbs every sample in order."""
        pipeline.process_stream(random_stream[:25])

        assert pipeline.noise_filter.updates == 25


class TestFailures:
    """Test error propagation."""

    def test_untrained_classifier(self, fast_settings: Settings):
        """Processing with an untrained classifier raises UntrainedModelError."""
        pipeline = PipelineOrchestrator.from_settings(fast_settings)

        with pytest.raises(UntrainedModelError):
            pipeline.process(RawSample(0.5, 0.3, 0.7))

    def test_malformed_sample(self, pipeline):
        """Test that non-finite readings raise MalformedInputError."""
        with pytest.raises(MalformedInputError):
            pipeline.process(RawSample(math.nan, 0.0, 0.0))

        assert pipeline.noise_filter.updates == 0

    @pytest.mark.parametrize("reading", [3e19, 1e25])
    def test_reading_beyond_float32_features(self, pipeline, reading: float):
        """A finite reading whose features overflow float32 is malformed input."""
        with pytest.raises(MalformedInputError, match="float32"):
            pipeline.process(RawSample(reading, 0.0, 0.0))

    def test_unexpected_error_wrapped(self, fast_settings: Settings):
        """Unexpected stage failures surface as ProcessingError."""
        pipeline = PipelineOrchestrator(fast_settings, ExplodingClassifier())

        with pytest.raises(ProcessingError) as exc_info:
            pipeline.process(RawSample(0.5, 0.3, 0.7))

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_stream_stops_at_first_failure(self, pipeline):
        """A failing sample aborts the whole stream call."""
        samples = [RawSample(1.0, 1.0, 1.0), RawSample(math.inf, 0.0, 0.0)]

        with pytest.raises(MalformedInputError):
            pipeline.process_stream(samples)


class TestWiring:
    """Test construction and ownership."""

    def test_shares_featurizer_with_classifier(self, fast_settings: Settings):
        """Training and prediction use one feature space."""
        pipeline = PipelineOrchestrator.from_settings(fast_settings)

        assert isinstance(pipeline.classifier, ActivityClassifier)
        assert pipeline.featurizer is pipeline.classifier.featurizer

    def test_filter_from_settings(self):
        """Test that the default filter is configured from settings."""
        settings = Settings(process_noise=3e-4, n_estimators=5)

        pipeline = PipelineOrchestrator.from_settings(settings)

        assert pipeline.noise_filter.process_noise == 3e-4

    def test_injected_filter_used(self, fast_settings, trained_classifier):
        """Test that an injected filter is the one updated."""
        noise_filter = NoiseFilter(initial_estimate=0.5)
        pipeline = PipelineOrchestrator(
            fast_settings, trained_classifier, noise_filter=noise_filter
        )

        pipeline.process(RawSample(0.5, 0.5, 0.5))

        assert noise_filter.updates == 1
        assert noise_filter.state[0].estimate == pytest.approx(0.5)

    def test_train_delegates(self, fast_settings: Settings, training_set):
        """Test that train() trains the owned classifier."""
        pipeline = PipelineOrchestrator.from_settings(fast_settings)

        pipeline.train(training_set)

        assert pipeline.classifier.is_trained
        assert pipeline.process(RawSample(0.0, 0.0, 0.0)).activity_label in (
            training_set.labels
        )
