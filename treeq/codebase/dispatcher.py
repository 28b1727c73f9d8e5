# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Concurrent parse-and-match driver.

A fixed number of workers drain a shared job queue. Each worker owns one
parser for its whole lifetime, parses a file, runs the compiled query and
hands the matches to a ``process`` callback; whatever the callback yields
goes onto a single result queue. A coordinator thread waits for every
worker and then closes the result queue with a sentinel, so the caller's
drain loop is the only merge step and no lock-guarded accumulator exists.

Unreadable or unparsable files are skipped: they contribute no results and
never stop the other workers. Results from different files arrive in no
particular order; results from one file keep the order ``process`` gave.
"""

import logging
import queue
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, Iterable, List, Sequence, TypeVar

from treeq.codebase.tree_sitter_manager import CompiledQuery, new_parser, parse_file
from treeq.models import FileJob, Match

logger = logging.getLogger(__name__)

T = TypeVar("T")

# process(job, matches, source) -> items for the result queue
ProcessFunc = Callable[[FileJob, List[Match], bytes], Iterable[T]]

_STOP = object()  # one per worker on the job queue
_DONE = object()  # closes the result queue


def effective_worker_count(requested: int, file_count: int) -> int:
    """Clamp the requested worker count to ``[1, file_count]``.

    Returns 0 only for an empty file set, where no workers are started.
    """
    if file_count <= 0:
        return 0
    return max(1, min(requested, file_count))


def dispatch(
    files: Sequence[FileJob],
    query: CompiledQuery,
    worker_count: int,
    process: ProcessFunc,
) -> List[T]:
    """Parse and match ``files`` concurrently and collect processed results.

    Args:
        files: Files to process
        query: Compiled query to run against every file
        worker_count: Requested parallelism; clamped to [1, len(files)]
        process: Converts one file's matches into result items

    Returns:
        All items yielded by ``process``, in no guaranteed cross-file order
    """
    workers = effective_worker_count(worker_count, len(files))
    if workers == 0:
        return []

    jobs: "queue.Queue[object]" = queue.Queue(maxsize=len(files) + workers)
    for job in files:
        jobs.put(job)
    for _ in range(workers):
        jobs.put(_STOP)

    results: "queue.Queue[object]" = queue.Queue()

    def worker() -> int:
        parser = new_parser(query.language)
        skipped = 0
        while True:
            job = jobs.get()
            if job is _STOP:
                return skipped
            try:
                tree, source = parse_file(parser, job.abs_path)
            except Exception as e:
                logger.debug(f"Skipping {job.display_path}: {e}")
                skipped += 1
                continue
            matches = query.run(tree, source, job.display_path)
            for item in process(job, matches, source):
                results.put(item)

    start_time = time.time()
    collected: List[T] = []

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="treeq-worker") as executor:
        futures = [executor.submit(worker) for _ in range(workers)]
        coordinator = threading.Thread(
            target=_close_when_done, args=(futures, results), name="treeq-coordinator", daemon=True
        )
        coordinator.start()

        while True:
            item = results.get()
            if item is _DONE:
                break
            collected.append(item)

        coordinator.join()

    # Re-raises anything process() raised; per-file read/parse errors never get here
    skipped = sum(future.result() for future in futures)

    logger.debug(
        f"Dispatched {len(files)} files to {workers} workers in "
        f"{time.time() - start_time:.3f}s ({skipped} skipped, {len(collected)} results)"
    )
    return collected


def _close_when_done(futures: List[Future], results: "queue.Queue[object]") -> None:
    wait(futures)
    results.put(_DONE)
