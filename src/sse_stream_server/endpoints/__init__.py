"""HTTP endpoint handlers."""

from .health import HealthHandler
from .status import StatusHandler
from .stream import StreamHandler

__all__ = ["HealthHandler", "StatusHandler", "StreamHandler"]
