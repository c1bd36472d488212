"""
Recursive per-channel noise filter.

Each accelerometer channel is smoothed by an independent scalar Kalman-style
estimator: the error covariance grows by the process noise on every step and
shrinks by the gain on every measurement. There are no cross-channel terms and
no control input.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace

from ..constants import FilterDefaults
from ..exceptions import ConfigurationError, MalformedInputError
from ..models import ChannelState, FilteredSample, RawSample, Vector3
from ..settings import Settings

logger = logging.getLogger(__name__)


class NoiseFilter:
    """
    Stateful smoother for a single tri-axial sample stream.

    ``update`` must be called once per incoming sample, in arrival order, by a
    single writer. The instance is not safe for concurrent use.

    Attributes:
        process_noise: Variance q added to the covariance on every step
        measurement_noise: Variance r of the sensor readings
    """

    def __init__(
        self,
        process_noise: float = FilterDefaults.PROCESS_NOISE,
        measurement_noise: float = FilterDefaults.MEASUREMENT_NOISE,
        initial_covariance: float = FilterDefaults.INITIAL_COVARIANCE,
        initial_estimate: float = FilterDefaults.INITIAL_ESTIMATE,
    ):
        """
        Initialize the filter.

        Args:
            process_noise: Process-noise variance q (must be > 0)
            measurement_noise: Measurement-noise variance r (must be > 0)
            initial_covariance: Starting error covariance p (must be > 0)
            initial_estimate: Starting estimate of every channel

        Raises:
            ConfigurationError: If any variance is not strictly positive
        """
        for name, value in (
            ("process_noise", process_noise),
            ("measurement_noise", measurement_noise),
            ("initial_covariance", initial_covariance),
        ):
            if not value > 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        self.process_noise = float(process_noise)
        self.measurement_noise = float(measurement_noise)
        self._initial_covariance = float(initial_covariance)
        self._initial_estimate = float(initial_estimate)
        self._channels: list[ChannelState] = []
        self._updates = 0
        self.reset()

    @classmethod
    def from_settings(cls, settings: Settings) -> "NoiseFilter":
        """Create a filter configured from application settings."""
        return cls(
            process_noise=settings.process_noise,
            measurement_noise=settings.measurement_noise,
            initial_covariance=settings.initial_covariance,
            initial_estimate=settings.initial_estimate,
        )

    @property
    def state(self) -> tuple[ChannelState, ...]:
        """Snapshot of the (estimate, covariance) pair of each channel."""
        return tuple(replace(channel) for channel in self._channels)

    @property
    def updates(self) -> int:
        """Number of samples absorbed since construction or the last reset."""
        return self._updates

    def reset(self) -> None:
        """Restore every channel to its construction-time state."""
        self._channels = [
            ChannelState(self._initial_estimate, self._initial_covariance)
            for _ in FilterDefaults.CHANNELS
        ]
        self._updates = 0

    def update(self, raw: RawSample | Sequence[float]) -> FilteredSample:
        """
        Absorb one raw reading and return the denoised triple.

        Args:
            raw: Raw (x, y, z) reading

        Returns:
            Updated per-channel estimates

        Raises:
            MalformedInputError: If any reading is NaN or infinite. The filter
                state is left untouched.
        """
        if not isinstance(raw, Vector3):
            raw = RawSample.from_sequence(raw)
        if not raw.is_finite():
            raise MalformedInputError(f"Non-finite accelerometer reading: {raw}")

        estimates = [
            self._update_channel(channel, value)
            for channel, value in zip(self._channels, raw.as_tuple(), strict=True)
        ]
        self._updates += 1
        return FilteredSample(*estimates)

    def _update_channel(self, channel: ChannelState, measurement: float) -> float:
        """Run one predict/update cycle on a single channel."""
        # Predict: covariance grows by the process noise
        covariance = channel.covariance + self.process_noise

        # Update: blend the measurement in by the gain
        gain = covariance / (covariance + self.measurement_noise)
        channel.estimate += gain * (measurement - channel.estimate)
        channel.covariance = covariance * (1.0 - gain)
        return channel.estimate
