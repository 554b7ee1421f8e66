"""pyhelmet logging: port and structlog adapter."""

from pyhelmet.logging.port import LoggingPort
from pyhelmet.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
