"""
Shared fixtures for Gateway tests.
"""

import copy
import json
import os

import pytest

FIXTURE_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def _read(name: str) -> str:
    with open(os.path.join(FIXTURE_DIR, name), encoding="utf-8") as handle:
        return handle.read()


@pytest.fixture
def search_body():
    """Raw upstream search body with two products."""
    return _read("search_two_products.json")


@pytest.fixture
def lookup_body():
    """Raw upstream product layout body."""
    return _read("lookup_found.json")


@pytest.fixture
def lookup_document(lookup_body):
    """Decoded product layout, safe to mutate per test."""
    return copy.deepcopy(json.loads(lookup_body))


@pytest.fixture
def search_document(search_body):
    """Decoded search response, safe to mutate per test."""
    return copy.deepcopy(json.loads(search_body))


@pytest.fixture
def not_found_body():
    """Raw upstream body carrying the not-found sentinel."""
    return _read("lookup_not_found.txt")
