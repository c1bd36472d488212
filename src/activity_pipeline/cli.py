"""
Command-line interface for the Activity Pipeline package.

This module trains the activity classifier from a labelled CSV and replays
recorded accelerometer streams through the per-sample pipeline.
"""

import json
import logging
from pathlib import Path

import click

from . import __version__
from .data import ActivityRecordRepository, SampleLoader, TrainingDataLoader
from .exceptions import ActivityPipelineError
from .models import RawSample
from .pipeline import PipelineOrchestrator
from .settings import Settings, load_settings


# Configure basic logging
def configure_logging(verbose: bool = False) -> None:
    """Configure logging with appropriate level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _trained_pipeline(settings: Settings) -> PipelineOrchestrator:
    """Build a pipeline and train its classifier from settings.training_file."""
    pipeline = PipelineOrchestrator.from_settings(settings)
    training_set = TrainingDataLoader(settings).load()
    pipeline.train(training_set)
    return pipeline


@click.group()
def main():
    """
    Classify activity from tri-axial accelerometer samples.

    Each sample is denoised, transformed to a magnitude spectrum, reduced to a
    small feature vector and labelled by a trained tree ensemble.
    """


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--training",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to labelled training CSV (overrides config)",
)
@click.option(
    "--samples",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to recorded samples CSV (overrides config)",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the records CSV to write (overrides config)",
)
def run(
    config: Path | None,
    verbose: bool,
    training: Path | None,
    samples: Path | None,
    output: Path | None,
) -> None:
    """
    Train the classifier and process a recorded sample stream.

    Every sample in the stream produces exactly one activity record; the
    records are written to CSV in arrival order.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)
    settings = load_settings(config)

    # Override settings if paths provided
    if training is not None:
        settings.training_file = training
    if samples is not None:
        settings.samples_file = samples
    if output is not None:
        settings.records_file = output

    try:
        pipeline = _trained_pipeline(settings)
        raw_samples = SampleLoader(settings).load()

        repository = ActivityRecordRepository()
        repository.extend(pipeline.process_stream(raw_samples))
        repository.save(settings.records_file)

        logger.info(f"Successfully processed {len(repository)} samples")
        logger.info("\nLabel Distribution:")
        for label, count in sorted(repository.label_counts().items()):
            logger.info(f"{label}: {count}")

    except ActivityPipelineError as e:
        logger.error(f"Processing failed: {str(e)}")
        raise click.Abort() from e
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--training",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to labelled training CSV (overrides config)",
)
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.argument("z", type=float)
def classify(
    config: Path | None,
    verbose: bool,
    training: Path | None,
    x: float,
    y: float,
    z: float,
) -> None:
    """
    Classify a single accelerometer reading.

    The reading is the first sample of a fresh stream, so the filtered values
    are still biased toward the filter's initial estimate.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(config)
        if training is not None:
            settings.training_file = training

        pipeline = _trained_pipeline(settings)
        record = pipeline.process(RawSample(x, y, z))

        output = record.to_flat_record()
        output["features"] = record.features.as_dict() if record.features else {}
        click.echo(json.dumps(output, indent=2))

    except ActivityPipelineError as e:
        logger.error(f"Classification failed: {str(e)}")
        raise click.Abort() from e
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
def info(config: Path | None) -> None:
    """Show the package version and the active settings."""
    settings = load_settings(config)

    click.echo(f"activity-pipeline {__version__}")
    click.echo("=" * 40)
    for name, value in settings.model_dump().items():
        click.echo(f"{name}: {value}")


if __name__ == "__main__":
    main()
