"""
Base service class.

Services hold in-memory state for a single caller; they are not shared
between threads without external serialization.
"""

from abc import ABC
from datetime import datetime
from typing import Callable, Optional
import logging


Clock = Callable[[], datetime]


class BaseService(ABC):
    """
    Abstract base class for all services.

    Provides common functionality:
    - Logging setup
    - An injectable clock for deterministic timestamps
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._clock = clock or datetime.now
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    def _now(self) -> datetime:
        return self._clock()
