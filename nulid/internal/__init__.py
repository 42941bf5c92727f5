from nulid.internal.logging import get_logger, parse_level, LogLevel, StructuredLogger
from nulid.internal.health import HealthChecker, Status

__all__ = [
    "get_logger",
    "parse_level",
    "LogLevel",
    "StructuredLogger",
    "HealthChecker",
    "Status",
]
