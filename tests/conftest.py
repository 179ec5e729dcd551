"""
Global pytest configuration and fixtures for the filter engine tests.

Fixtures here are available to all test modules without explicit import.
"""

import time
from datetime import datetime
from typing import Callable

import pytest  # type: ignore
from faker import Faker  # type: ignore

from notefilter.config.settings import FilterSettings
from notefilter.filters.register_filters import create_filter_registry
from notefilter.filters.registry import FilterRegistry
from notefilter.models.notes import Note, NoteWithContent
from notefilter.services.filter_config.filter_config_service import FilterConfigService

from tests.utils.helpers import FIXED_NOW, InMemoryFilterConfigRepository

fake: Faker = Faker()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock frozen at FIXED_NOW for preset resolution"""
    return lambda: FIXED_NOW


@pytest.fixture
def registry() -> FilterRegistry:
    """Fresh registry with the built-in filter types"""
    return create_filter_registry()


@pytest.fixture
def repository() -> InMemoryFilterConfigRepository:
    return InMemoryFilterConfigRepository()


@pytest.fixture
def settings() -> FilterSettings:
    return FilterSettings()


@pytest.fixture
def service(registry, repository, settings) -> FilterConfigService:
    return FilterConfigService(registry, repository=repository, settings=settings)


@pytest.fixture
def make_note() -> Callable[..., Note]:
    """
    Factory for notes with realistic defaults.

    Returns:
        Callable accepting Note field overrides
    """
    def _make(**overrides) -> Note:
        now = int(time.time())
        data = {
            "id": fake.uuid4(),
            "title": fake.sentence(nb_words=4),
            "tags": [],
            "created_at": now,
            "modified_at": now,
        }
        data.update(overrides)
        return Note(**data)

    return _make


@pytest.fixture
def make_note_with_content() -> Callable[..., NoteWithContent]:
    def _make(**overrides) -> NoteWithContent:
        now = int(time.time())
        data = {
            "id": fake.uuid4(),
            "title": fake.sentence(nb_words=4),
            "tags": [],
            "created_at": now,
            "modified_at": now,
            "content": fake.paragraph(),
        }
        data.update(overrides)
        return NoteWithContent(**data)

    return _make
