"""Run the per-variant pipeline in-process or on a process pool.

Variants have no ordering dependencies between them, so batches can be
fanned out to worker processes; results come back in input order.
"""

from concurrent.futures import Executor, ProcessPoolExecutor
from typing import Sequence

import structlog

from csq_pipeline.annotation.pipeline import VariantAnnotation, annotate_consequences
from csq_pipeline.consequence.schema import SCHEMA_WIDTH
from csq_pipeline.transcripts import TranscriptIndex

logger = structlog.get_logger()

# Per-process copy of the index, installed by the pool initializer
_worker_index: TranscriptIndex | None = None
_worker_schema_width: int = SCHEMA_WIDTH


def _init_worker(index: TranscriptIndex, schema_width: int) -> None:
    global _worker_index, _worker_schema_width
    _worker_index = index
    _worker_schema_width = schema_width


def _annotate_in_worker(raw_consequences: Sequence[str]) -> VariantAnnotation:
    if _worker_index is None:
        raise RuntimeError("Worker process was started without a transcript index")
    return annotate_consequences(raw_consequences, _worker_index, _worker_schema_width)


class ConsequenceAnnotator:
    """Annotate batches of variants, optionally across worker processes.

    Use as a context manager so the pool is shut down with the run.
    """

    def __init__(
        self,
        index: TranscriptIndex,
        workers: int = 1,
        schema_width: int = SCHEMA_WIDTH,
    ):
        """Initialize annotator.

        Args:
            index: Transcript metadata index, shared read-only
            workers: Number of worker processes (1 = annotate in-process)
            schema_width: Width of merged records
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.index = index
        self.workers = workers
        self.schema_width = schema_width
        self._executor: Executor | None = None

    def __enter__(self) -> "ConsequenceAnnotator":
        if self.workers > 1:
            logger.info("worker_pool_start", workers=self.workers)
            self._executor = ProcessPoolExecutor(
                max_workers=self.workers,
                initializer=_init_worker,
                initargs=(self.index, self.schema_width),
            )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown()
            self._executor = None
            logger.info("worker_pool_stop", workers=self.workers)

    def annotate_many(self, batch: Sequence[Sequence[str]]) -> list[VariantAnnotation]:
        """Annotate a batch of variants; results are in batch order."""
        if self._executor is None:
            return [
                annotate_consequences(raw, self.index, self.schema_width)
                for raw in batch
            ]
        chunksize = max(1, len(batch) // (self.workers * 4))
        return list(self._executor.map(_annotate_in_worker, batch, chunksize=chunksize))
