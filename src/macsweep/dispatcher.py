"""Bounded parallel dispatch of size aggregation jobs."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Sequence

from macsweep.config import DEFAULT_CHUNK_SIZE, default_worker_count
from macsweep.models import SizeReport
from macsweep.scanner import aggregate

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


class WorkerPool:
    """
    Runs independent aggregation jobs on a bounded thread pool.

    Each job is a single path. Jobs never share state: every job keeps its own
    totals and hands back one SizeReport, collected here by the dispatching
    thread. Recursion inside a job stays sequential.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        aggregate_fn: Callable[[str], SizeReport] = aggregate,
    ):
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self.max_workers = max_workers or default_worker_count()
        self.chunk_size = chunk_size
        self.aggregate_fn = aggregate_fn

    def run_batched(
        self,
        paths: Sequence[str],
        progress_callback: ProgressCallback | None = None,
    ) -> list[tuple[str, SizeReport]]:
        """
        Cross-path dispatch for a small set of top-level locations.

        Jobs go out in batches no larger than the worker ceiling and each batch
        is fully awaited before the next one is submitted.

        Args:
            paths: Root paths to aggregate
            progress_callback: Optional callback(path, current, total)

        Returns:
            (path, SizeReport) pairs in the same order as paths
        """
        return self._dispatch(paths, self.max_workers, progress_callback)

    def run_chunked(
        self,
        paths: Sequence[str],
        progress_callback: ProgressCallback | None = None,
    ) -> list[tuple[str, SizeReport]]:
        """
        Intra-directory dispatch for the (possibly many) children of one path.

        Jobs are submitted in chunks of chunk_size; the pool itself keeps at
        most max_workers of them running at once.

        Args:
            paths: Child paths to aggregate
            progress_callback: Optional callback(path, current, total)

        Returns:
            (path, SizeReport) pairs in the same order as paths
        """
        return self._dispatch(paths, self.chunk_size, progress_callback)

    def _dispatch(
        self,
        paths: Sequence[str],
        group_size: int,
        progress_callback: ProgressCallback | None,
    ) -> list[tuple[str, SizeReport]]:
        paths = list(paths)
        if not paths:
            return []

        reports: list[SizeReport | None] = [None] * len(paths)
        total = len(paths)
        completed = 0

        with ThreadPoolExecutor(max_workers=min(self.max_workers, total)) as executor:
            for start in range(0, total, group_size):
                future_to_index = {
                    executor.submit(self.aggregate_fn, paths[i]): i
                    for i in range(start, min(start + group_size, total))
                }

                for future in as_completed(future_to_index):
                    index = future_to_index[future]
                    reports[index] = self._collect(paths[index], future)
                    completed += 1
                    if progress_callback:
                        progress_callback(paths[index], completed, total)

        return [(path, report) for path, report in zip(paths, reports)]

    @staticmethod
    def _collect(path: str, future: Future[SizeReport]) -> SizeReport:
        """Result of one job, or a zero report if the job itself failed."""
        try:
            return future.result()
        except Exception as e:
            logger.warning("Size job for %s failed, reporting zero: %s", path, e)
            return SizeReport.zero()

