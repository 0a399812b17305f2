from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger


def _noop(message: str) -> None:
    return None


@dataclass(frozen=True)
class ManagerHooks:
    """
    Logging callbacks supplied by the owning storage manager.

    Both callbacks receive a formatted, human-readable message. A provider
    created without a manager gets the no-op defaults, and a callback passed
    as ``None`` is replaced by the no-op.
    """

    debug: Optional[Callable[[str], None]] = _noop
    error: Optional[Callable[[str], None]] = _noop

    def __post_init__(self):
        if self.debug is None:
            object.__setattr__(self, "debug", _noop)
        if self.error is None:
            object.__setattr__(self, "error", _noop)

    def notify_debug(self, message: str) -> None:
        logger.debug(message)
        self.debug(message)

    def notify_error(self, message: str) -> None:
        logger.error(message)
        self.error(message)
