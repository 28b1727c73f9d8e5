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

"""File discovery for the dispatcher.

Produces the FileJob list a run works on. Files inside ignored directories,
files with unrecognized extensions and files above the byte ceiling are
excluded silently; only a missing root is an error.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from treeq.codebase.ignore_patterns import DEFAULT_IGNORE_DIRS, should_ignore_dir
from treeq.errors import ConfigurationError
from treeq.models import FileJob

logger = logging.getLogger(__name__)


def _is_supported(name: str, extensions: Iterable[str]) -> bool:
    ext = os.path.splitext(name)[1].lower()
    return bool(ext) and ext in extensions


def _within_limit(path: str, max_bytes: int) -> bool:
    if max_bytes <= 0:
        return True
    try:
        return os.path.getsize(path) <= max_bytes
    except OSError:
        # Skip files we can't stat
        return False


def discover(
    root: str,
    extensions: Iterable[str],
    ignore_dirs: Optional[Iterable[str]] = None,
    max_bytes: int = 0,
) -> List[FileJob]:
    """Find all files under ``root`` with a recognized extension.

    Args:
        root: Directory to walk (a single file is accepted too)
        extensions: Extensions with leading dot, e.g. [".go"]
        ignore_dirs: Directory names to prune. Defaults to DEFAULT_IGNORE_DIRS.
        max_bytes: Skip files larger than this; 0 or less disables the check

    Returns:
        FileJobs in walk order; display paths are POSIX paths relative to root

    Raises:
        ConfigurationError: If root does not exist
    """
    abs_root = os.path.abspath(root)
    if not os.path.exists(abs_root):
        raise ConfigurationError(f"path does not exist: {root}")

    exts = {e.lower() for e in extensions}
    skip = frozenset(ignore_dirs) if ignore_dirs is not None else DEFAULT_IGNORE_DIRS

    if os.path.isfile(abs_root):
        if _is_supported(abs_root, exts) and _within_limit(abs_root, max_bytes):
            return [FileJob(abs_path=abs_root, display_path=os.path.basename(abs_root))]
        return []

    jobs: List[FileJob] = []
    excluded = 0
    for dirpath, dirnames, filenames in os.walk(abs_root):
        dirnames[:] = sorted(d for d in dirnames if not should_ignore_dir(d, skip))

        for filename in sorted(filenames):
            if not _is_supported(filename, exts):
                continue
            path = os.path.join(dirpath, filename)
            if not _within_limit(path, max_bytes):
                excluded += 1
                continue
            jobs.append(
                FileJob(
                    abs_path=path,
                    display_path=Path(os.path.relpath(path, abs_root)).as_posix(),
                )
            )

    logger.debug(f"Discovered {len(jobs)} files under {abs_root} ({excluded} over size limit)")
    return jobs


def single(path: str) -> FileJob:
    """Return a single file as a FileJob, bypassing discovery.

    The display path is the file's base name. Extension and size are not
    checked; reading happens later and may still fail.
    """
    abs_path = os.path.abspath(path)
    return FileJob(abs_path=abs_path, display_path=os.path.basename(abs_path))
