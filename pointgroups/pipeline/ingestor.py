#!/usr/bin/env python3
"""
Point Cloud Ingestor

Streams an XYZ file into position and colour buffers, then emits them as
bounded-size point groups to a geometry consumer.

Ingestion is a two-phase pipeline: every line is parsed and coloured first,
because relocation needs the minimum corner of the whole cloud; only then
are batches sliced, shifted by the relocation offset and emitted in
ascending order. A fatal error during parsing therefore never leaves a
partially emitted point cloud behind.

``run()`` is a generator that yields an IngestionProgress at each
suspension point (every ``progress_interval`` lines and every batch), so a
host loop can interleave UI updates; ``ingest()`` drives it to completion.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union

import numpy as np

from ..config import IngestionConfig
from ..interfaces.collaborators import GeometryConsumer, GradientEvaluator, ProgressReporter
from ..loaders.record_parser import RecordParser
from ..loaders.xyz_loader import XYZLoader, XYZSource
from ..models.point_records import (
    IngestionPhase,
    IngestionProgress,
    IngestionResult,
    IngestionStatus,
    PointCloudDataset,
)
from ..processors.colour_policy import ColourPolicy, build_colour_policy
from ..spatial.batching import BatchPlanner
from ..spatial.bounds import BoundsAccumulator
from ..error_handling import (
    ErrorHandler,
    GeometryEmissionError,
    PointCloudIngestError,
    RecordError,
)


logger = logging.getLogger(__name__)

# Number of progress notifications per parsing pass when no interval is configured
DEFAULT_PROGRESS_STEPS = 20


@dataclass
class IngestionContext:
    """State of one ingestion run, owned by the ingestor until it finishes."""

    source: XYZSource
    consumer: GeometryConsumer
    dataset: Optional[PointCloudDataset] = None
    bounds: BoundsAccumulator = field(default_factory=BoundsAccumulator)
    skipped_lines: List[int] = field(default_factory=list)
    batches_emitted: int = 0
    result: Optional[IngestionResult] = None
    started_at: float = field(default_factory=time.time)
    _cancelled: bool = False

    @property
    def dataset_name(self) -> str:
        return self.source.name

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop at the next suspension point. Emitted batches stay as they are."""
        self._cancelled = True


class PointCloudIngestor:
    """Orchestrates parsing, colouring, relocation and batch emission."""

    def __init__(self, config: IngestionConfig, consumer: GeometryConsumer,
                 gradient: Optional[GradientEvaluator] = None,
                 progress: Optional[ProgressReporter] = None,
                 loader: Optional[XYZLoader] = None):
        """
        Validate the configuration and prepare the per-run collaborators.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config.validate()
        self.config = config
        self.consumer = consumer
        self.progress = progress
        self.loader = loader or XYZLoader()
        self.colour_policy: ColourPolicy = build_colour_policy(config, gradient)
        self.parser = RecordParser(
            config.scale, config.invert_yz, config.delimiter,
            read_rgb=self.colour_policy.reads_rgb,
            read_intensity=self.colour_policy.reads_intensity,
        )
        self.error_handler = ErrorHandler(__name__)

    def start(self, source_path: Union[str, Path]) -> IngestionContext:
        """
        Open the source and create the context for a run.

        Raises:
            SourceNotFoundError: If the source file does not exist or cannot be read
        """
        source = self.loader.open(source_path)
        return IngestionContext(source=source, consumer=self.consumer)

    def ingest(self, source_path: Union[str, Path]) -> IngestionResult:
        """Run a complete ingestion of one file and return its result."""
        context = self.start(source_path)
        for _ in self.run(context):
            pass
        return context.result

    def run(self, context: IngestionContext) -> Iterator[IngestionProgress]:
        """
        Execute the collect, offset and emit phases.

        Yields:
            IngestionProgress at each suspension point

        Raises:
            RecordError: If a line is malformed and the policy is "abort"
            GeometryEmissionError: If the consumer rejects a batch
        """
        logger.info(f"Starting ingestion of {context.source.path}")

        yield from self._collect(context)
        if context.cancelled:
            self._finish(context, IngestionStatus.CANCELLED)
            return

        dataset = context.dataset
        logger.info(f"Parsed {dataset.size:,} points in {time.time() - context.started_at:.2f}s")
        if dataset.size:
            (x_min, x_max), (y_min, y_max), (z_min, z_max) = dataset.bounds
            logger.info(f"Point cloud bounds: "
                        f"X({x_min:.2f}, {x_max:.2f}), "
                        f"Y({y_min:.2f}, {y_max:.2f}), "
                        f"Z({z_min:.2f}, {z_max:.2f})")

        yield from self._emit(context)
        status = IngestionStatus.CANCELLED if context.cancelled else IngestionStatus.COMPLETED
        self._finish(context, status)

    def _collect(self, context: IngestionContext) -> Iterator[IngestionProgress]:
        """Parse every line into the dataset buffers."""
        total = context.source.num_points
        context.dataset = dataset = PointCloudDataset.allocate(total)
        dataset.metadata.update({'source': str(context.source.path), 'source_lines': total})

        interval = self.config.progress_interval or max(1, total // DEFAULT_PROGRESS_STEPS)
        relocate = self.config.relocate_to_origin
        skip_malformed = self.config.on_malformed == "skip"

        index = 0
        processed = 0
        for line_number, line in context.source.iter_lines():
            if context.cancelled:
                logger.info(f"Ingestion cancelled after {processed:,} of {total:,} lines")
                dataset.truncate(index)
                return

            if index >= total:
                raise PointCloudIngestError(
                    f"Source {context.source.path} grew while it was being read"
                )

            processed += 1
            try:
                record = self.parser.parse(line)
                colour = self.colour_policy.colour_for(record)
            except RecordError as e:
                error = e.at_line(line_number)
                if not skip_malformed:
                    self.error_handler.log_error(error, "record parsing")
                    raise error from e
                self.error_handler.log_warning(str(error), "record parsing")
                context.skipped_lines.append(line_number)
            else:
                dataset.positions[index] = record.position
                dataset.colors[index] = colour
                if relocate:
                    context.bounds.update(record.position)
                index += 1

            if processed % interval == 0 or processed == total:
                yield self._notify(IngestionProgress(IngestionPhase.PARSING, processed, total))

        if index < total:
            dataset.truncate(index)
            logger.warning(f"Skipped {len(context.skipped_lines):,} malformed lines")

    def _emit(self, context: IngestionContext) -> Iterator[IngestionProgress]:
        """Slice the dataset into batches and hand each one to the consumer."""
        dataset = context.dataset
        batches = BatchPlanner.plan(dataset.size, self.config.batch_capacity)

        offset = None
        if self.config.relocate_to_origin and context.bounds.has_points:
            offset = np.asarray(context.bounds.current(), dtype=dataset.positions.dtype)
            logger.info(f"Relocating by offset {tuple(offset.tolist())}")

        context.consumer.begin(context.dataset_name, len(batches))
        for batch in batches:
            if context.cancelled:
                logger.info(f"Ingestion cancelled after {context.batches_emitted} of {len(batches)} point groups")
                return

            # Fresh arrays: the consumer owns what it receives
            positions = dataset.positions[batch.as_slice]
            positions = positions - offset if offset is not None else positions.copy()
            colors = dataset.colors[batch.as_slice].copy()

            try:
                context.consumer.consume(batch.index, positions, colors)
            except PointCloudIngestError:
                raise
            except Exception as e:
                raise GeometryEmissionError(
                    f"Geometry consumer rejected point group {batch.index}: {e}"
                ) from e

            context.batches_emitted += 1
            yield self._notify(IngestionProgress(IngestionPhase.EMITTING, context.batches_emitted, len(batches)))

        context.consumer.finish()

    def _notify(self, progress: IngestionProgress) -> IngestionProgress:
        logger.debug(progress.describe())
        if self.progress is not None:
            self.progress.report(progress)
        return progress

    def _finish(self, context: IngestionContext, status: IngestionStatus) -> None:
        dataset = context.dataset
        num_points = dataset.size if dataset is not None else 0
        offset = context.bounds.current() if self.config.relocate_to_origin else None
        context.result = IngestionResult(
            status=status,
            num_points=num_points,
            num_batches=BatchPlanner.count(num_points, self.config.batch_capacity),
            batches_emitted=context.batches_emitted,
            skipped_lines=tuple(context.skipped_lines),
            offset=offset,
            elapsed_seconds=time.time() - context.started_at,
        )
        logger.info(f"Ingestion {status.value} in {context.result.elapsed_seconds:.2f}s: "
                    f"{context.batches_emitted} of {context.result.num_batches} point groups emitted")
