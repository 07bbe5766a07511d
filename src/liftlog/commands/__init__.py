"""CLI commands for liftlog."""

from .init import init
from .library import library
from .local import local
from .migrate import migrate
from .serve import serve
from .stats import stats

__all__ = [
    "init",
    "library",
    "local",
    "migrate",
    "serve",
    "stats",
]
