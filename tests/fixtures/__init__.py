"""Shared pytest fixtures for the dashboard client tests."""

from .catalog import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
