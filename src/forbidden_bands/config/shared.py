"""Process-wide character tables, initialized once."""

import logging
import os
import threading
from typing import Callable

from forbidden_bands.config.loader import load_config, load_default_config
from forbidden_bands.core.tables import TableSet

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FORBIDDEN_BANDS_CONFIG"


class SharedTables:
    """
    A TableSet that is set at most once and only read afterwards.

    The first initializer wins. Later initializers, including ones that
    race the first, get the already-stored tables back and their own
    result is discarded. Readers never see a partially built value.
    """

    def __init__(self) -> None:
        self._tables: TableSet | None = None
        self._lock = threading.Lock()

    def get(self) -> TableSet | None:
        """Get the tables, or None if not initialized yet."""
        return self._tables

    @property
    def initialized(self) -> bool:
        return self._tables is not None

    def initialize(self, tables: TableSet) -> TableSet:
        """Store ``tables`` unless already initialized; returns the stored tables."""
        with self._lock:
            if self._tables is None:
                self._tables = tables
                logger.debug("Shared character tables initialized (version %s)", tables.version)
            elif self._tables is not tables:
                logger.debug("Shared character tables already initialized, discarding late value")
            return self._tables

    def get_or_load(self, loader: Callable[[], TableSet]) -> TableSet:
        """Get the tables, calling ``loader`` to build them on first use."""
        tables = self._tables
        if tables is not None:
            return tables
        with self._lock:
            if self._tables is None:
                self._tables = loader()
                logger.debug(
                    "Shared character tables loaded (version %s)", self._tables.version
                )
            return self._tables


def load_configured_tables() -> TableSet:
    """Load the file named by FORBIDDEN_BANDS_CONFIG, or the built-in tables."""
    path = os.environ.get(CONFIG_ENV_VAR)
    if path:
        return load_config(path)
    return load_default_config()


_DEFAULT = SharedTables()


def default_tables() -> TableSet:
    """Get the process-wide tables, loading them on first use."""
    return _DEFAULT.get_or_load(load_configured_tables)
