"""pycsp logging — structlog configuration for the library loggers."""

from pycsp.logging.structlog_adapter import LIBRARY_LOGGERS, StructlogAdapter, tag_csp_event

__all__ = ["LIBRARY_LOGGERS", "StructlogAdapter", "tag_csp_event"]
