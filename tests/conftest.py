"""Test configuration for the catalog dashboard."""

from tests.fixtures import *  # noqa: F401,F403
