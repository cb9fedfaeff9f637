"""Test configuration and fixtures for the sales report API."""

from tests.fixtures import *  # noqa: F401,F403
