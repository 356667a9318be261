"""Shared test fixtures and configuration."""
import sys
import os

import pytest

# Ensure the project package is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set environment BEFORE any application module is imported.
# Tests run against the in-memory store; no real connections are made.
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("MATCHING_RANDOM_SEED", "7")


@pytest.fixture
def store():
    from groupmatch.database.memory_store import InMemoryDocumentStore
    return InMemoryDocumentStore()
