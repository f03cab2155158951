from .app import create_app
from .session import BuildRecord, BuildStore

__all__ = [
    "create_app",
    "BuildRecord",
    "BuildStore",
]
