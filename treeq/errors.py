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

"""Exceptions raised by treeq.

Only configuration and query-compile problems surface to callers. Errors
on individual files (unreadable, unparsable) are absorbed by the
dispatcher and never reach this hierarchy.
"""


class TreeqError(Exception):
    """Base class for all treeq errors."""


class ConfigurationError(TreeqError, ValueError):
    """Required input is missing or refers to something unknown.

    Raised before any file is read: empty query text, empty search symbol,
    missing outline file, unregistered language, missing scan root.
    """


class QueryCompileError(TreeqError, ValueError):
    """A tree-sitter query pattern failed to compile."""

    def __init__(self, message: str, query: str = ""):
        super().__init__(message)
        self.query = query
