"""School closure registry: record store, validation, dashboard queries and export."""

from .core.config import VERSION

__version__ = VERSION
