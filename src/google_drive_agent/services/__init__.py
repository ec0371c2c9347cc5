"""Google API services used by the agent."""

from . import drive

__all__ = [
    "drive",
]
