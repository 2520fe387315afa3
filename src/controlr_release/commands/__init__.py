"""CLI command implementations for controlr-release.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .agents import agents
from .doctor import doctor
from .image import image
from .init import init
from .quick import quick
from .release import release

__all__ = [
    "agents",
    "doctor",
    "image",
    "init",
    "quick",
    "release",
]
