"""Root conftest — shared test configuration."""

import os

import pytest

from tests.services.fake_fetcher import FakeFetcher

# Keep tests independent of any local .env
os.environ.setdefault("SCHEMA_PATH", "schema.graphql")
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def fetcher():
    return FakeFetcher()
