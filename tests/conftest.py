"""Shared fixtures for the intake tests."""
import pytest

from intake.config import DEFAULT_PATTERN_TABLES
from intake.services.document_processor import DocumentProcessor
from intake.services.storage_service import InMemoryStorage


STRUCTURED_TEXT = """# Overview
Our coaching approach helps solo founders grow revenue.
The team reviews every client engagement weekly.

# Details
Leadership development sessions run every Monday.
"""


@pytest.fixture
def tables():
    return DEFAULT_PATTERN_TABLES


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def processor(storage):
    return DocumentProcessor(storage_service=storage)


@pytest.fixture
def structured_text():
    return STRUCTURED_TEXT
