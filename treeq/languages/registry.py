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
"""Language plugin registry.

Registries are plain objects built by the caller and passed into the
operations in ``treeq.api``. There is no process-wide registry, so nothing
depends on import-time registration order.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Type, Union

from treeq.languages.base import LanguagePlugin

logger = logging.getLogger(__name__)

PluginFactory = Callable[[], LanguagePlugin]


class LanguageRegistry:
    """Maps language names and aliases to plugin instances.

    Plugins are instantiated once, on registration, so their config is
    available for alias resolution straight away.
    """

    def __init__(self):
        self._plugins: Dict[str, LanguagePlugin] = {}
        self._aliases: Dict[str, str] = {}  # golang -> go

    def register(
        self,
        name: str,
        plugin: Union[Type[LanguagePlugin], PluginFactory],
        aliases: Optional[List[str]] = None,
    ) -> None:
        """Register a plugin class or factory under ``name``.

        Aliases from the plugin's config are added to ``aliases``.
        Registering a name again replaces the earlier plugin.
        """
        name = name.lower()
        instance = plugin()
        self._plugins[name] = instance

        for alias in list(aliases or []) + instance.config.aliases:
            self._aliases[alias.lower()] = name
        logger.debug(f"Registered language plugin: {name}")

    def get(self, name: str) -> LanguagePlugin:
        """Look up a plugin by name or alias (case-insensitive).

        Raises:
            KeyError: If the language is not registered
        """
        key = name.lower()
        key = self._aliases.get(key, key)
        if key not in self._plugins:
            available = ", ".join(sorted(self._plugins))
            raise KeyError(f"Language '{name}' not registered. Available: {available}")
        return self._plugins[key]


def create_default_registry() -> LanguageRegistry:
    """Build a new registry holding the built-in plugins.

    Returns:
        A fresh registry; callers own it and may register more plugins.
    """
    from treeq.languages.plugins import GoPlugin

    registry = LanguageRegistry()
    registry.register("go", GoPlugin)
    return registry
