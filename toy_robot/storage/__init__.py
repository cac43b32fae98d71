"""
Storage port used by the robot session, plus its adapters.

    from toy_robot.storage import HttpStorage, LocalStorage, StorageError
"""

from .base import StorageError, StoragePort
from .http import HttpStorage
from .local import LocalStorage

__all__ = [
    "HttpStorage",
    "LocalStorage",
    "StorageError",
    "StoragePort",
]
