"""
Module: engine.registry

Purpose:
    Map table ids to cached TableProcessor instances. Definitions are
    loaded lazily on first use; processors are built on first request and
    reused for the life of the registry.

Key Functions:
    - get_registry(): Process-wide default registry

Key Classes:
    - ProcessorRegistry

Dependencies:
    - threading (std)
    - engine.config: TABLE_PATTERNS, EngineConfig
    - engine.loading: load_definitions
    - engine.patterns: PROCESSOR_CLASSES

Used By:
    - engine.controller: resolve() / get_available_tables()
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Dict, List, Mapping, Optional

from oob_toolkit.core.errors import ConfigurationError, DefinitionError, LoaderError
from oob_toolkit.core.models.definitions import TableDefinition

from .config import TABLE_PATTERNS, EngineConfig, ResolutionPattern
from .loading import load_definitions
from .patterns import PROCESSOR_CLASSES, TableProcessor

logger = logging.getLogger(__name__)


class ProcessorRegistry:
    """
    Lazily built, cached processors keyed by table id.

    Missing definitions and unknown patterns are logged and yield None;
    one failing lookup never affects the cache for other ids.

    Attributes:
        config: Loading configuration

    Example:
        >>> registry = ProcessorRegistry()
        >>> registry.get_processor("C").pattern
        <ResolutionPattern.MULTI_TASKING: 'multi_tasking'>
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        definitions: Optional[Mapping[str, TableDefinition]] = None,
        patterns: Optional[Mapping[str, ResolutionPattern]] = None,
    ):
        self.config = config or EngineConfig()
        self._supplied = dict(definitions) if definitions is not None else None
        self._patterns = dict(TABLE_PATTERNS if patterns is None else patterns)
        self._definitions: Optional[Dict[str, TableDefinition]] = None
        self._processors: Dict[str, TableProcessor] = {}
        self._seeded: Optional[random.Random] = None
        self._lock = threading.RLock()

    # ─────────────────────────────────────────────────────────────────────────
    # Definitions
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def definitions(self) -> Dict[str, TableDefinition]:
        with self._lock:
            if self._definitions is None:
                if self._supplied is not None:
                    self._definitions = dict(self._supplied)
                else:
                    self._definitions = load_definitions(
                        self.config.data_dir,
                        validate_schema=self.config.validate_schema,
                        strict_ranges=self.config.strict_ranges,
                    )
            return self._definitions

    def get_definition(self, table_id: str) -> Optional[TableDefinition]:
        return self.definitions.get(table_id)

    def pattern_for(self, table_id: str) -> Optional[ResolutionPattern]:
        """Static mapping first, then the definition's own pattern hint."""
        pattern = self._patterns.get(table_id)
        if pattern is not None:
            return pattern
        definition = self.get_definition(table_id)
        if definition is not None and definition.pattern:
            return ResolutionPattern(definition.pattern)
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Processors
    # ─────────────────────────────────────────────────────────────────────────

    def get_processor(self, table_id: str) -> Optional[TableProcessor]:
        """
        Return the cached processor for ``table_id``, building it on first use.

        Returns:
            TableProcessor, or None if the table is unknown, misconfigured or
            its data directory cannot be loaded
        """
        with self._lock:
            cached = self._processors.get(table_id)
            if cached is not None:
                return cached

            try:
                definition = self.get_definition(table_id)
            except (LoaderError, DefinitionError) as e:
                logger.error(f"Table data could not be loaded for table {table_id!r}: {e}")
                return None
            if definition is None:
                logger.error(f"No table definition found for table {table_id!r}")
                return None

            pattern = self.pattern_for(table_id)
            if pattern is None:
                logger.error(f"No resolution pattern configured for table {table_id!r}")
                return None

            try:
                processor = PROCESSOR_CLASSES[pattern](definition)
            except ConfigurationError as e:
                logger.error(str(e))
                return None

            self._processors[table_id] = processor
            logger.debug(f"Created {processor!r}")
            return processor

    def clear_cache(self) -> None:
        """Drop all processors and definitions; the next lookup reloads."""
        with self._lock:
            self._processors.clear()
            self._definitions = None
        logger.debug("Processor registry cache cleared")

    def random_source(self) -> random.Random:
        """
        Default RNG for calls that inject none.

        With ``config.seed`` set, every call shares one generator seeded
        once, so successive resolutions differ while the whole sequence
        reproduces for a new registry with the same seed. Without a seed
        each call gets a fresh generator.
        """
        if self.config.seed is None:
            return random.Random()
        with self._lock:
            if self._seeded is None:
                self._seeded = random.Random(self.config.seed)
            return self._seeded

    def get_available_tables(self, module: Optional[str] = None) -> List[str]:
        """
        List known table ids, in load order.

        Args:
            module: Only tables of this game module
        """
        return [
            table_id
            for table_id, definition in self.definitions.items()
            if module is None or definition.module == module
        ]

    @property
    def cached_ids(self) -> List[str]:
        with self._lock:
            return list(self._processors)


_default_registry: Optional[ProcessorRegistry] = None
_default_lock = threading.Lock()


def get_registry() -> ProcessorRegistry:
    """Process-wide registry over the packaged table data."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = ProcessorRegistry()
        return _default_registry
