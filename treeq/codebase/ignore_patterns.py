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

"""Directory names skipped during file discovery.

A directory is skipped when its own name is in the ignore set; the match
is on the name only, never on a glob or a full path.
"""

from typing import FrozenSet, Iterable, Optional

DEFAULT_IGNORE_DIRS: FrozenSet[str] = frozenset(
    {
        # Version control
        ".git",
        ".hg",
        ".svn",
        ".jj",
        # Dependencies
        "node_modules",
        "vendor",
        ".venv",
        # Build outputs
        "dist",
        "build",
        "target",
        # Caches
        "__pycache__",
        ".mypy_cache",
        ".pytest_cache",
        ".next",
        ".cache",
        ".turbo",
        # Coverage
        "coverage",
    }
)


def should_ignore_dir(name: str, ignore_dirs: Optional[Iterable[str]] = None) -> bool:
    """Check if a directory should be skipped.

    Args:
        name: Directory name (not a path)
        ignore_dirs: Names to skip. Defaults to DEFAULT_IGNORE_DIRS.

    Example:
        >>> should_ignore_dir("vendor")
        True
        >>> should_ignore_dir("internal")
        False
    """
    effective = DEFAULT_IGNORE_DIRS if ignore_dirs is None else ignore_dirs
    return name in effective
