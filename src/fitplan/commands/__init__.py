"""CLI commands for fitplan."""

from .init import init
from .plan import plan
from .profile import profile
from .record import history, record
from .serve import serve
from .stats import stats

__all__ = [
    "history",
    "init",
    "plan",
    "profile",
    "record",
    "serve",
    "stats",
]
