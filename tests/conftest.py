"""
Shared test fixtures for the Plantly care test suite.

Provides:
- A controllable clock
- A recording in-memory notification platform
- A collection store wired to in-memory collaborators and a deferred
  executor (background work runs only when drained)

Usage:
    def test_example(store, clock, platform):
        plant = store.add_plant(PlantCreate(name="Fern"))
        drain(store)
        assert len(platform.calls_named("schedule_at")) == 3
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure repository root is on sys.path so tests can import application modules
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app.core.config import Settings
from app.core.dependencies import build_collection_store
from app.core.exceptions import NotificationPlatformError
from app.core.executor import DeferredExecutor
from app.notifications.push_service import InMemoryNotificationPlatform
from app.plants.repository import InMemoryCollectionRepository

logging.getLogger("app").setLevel(logging.WARNING)


START = datetime(2025, 3, 1, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable returning a settable 'now'."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingPlatform(InMemoryNotificationPlatform):
    """In-memory platform that records every call made to it."""

    def __init__(self) -> None:
        super().__init__()
        self.calls = []

    async def schedule_at(self, identifier, fire_at, title, body, payload):
        self.calls.append(("schedule_at", identifier, payload.get("plantId")))
        return await super().schedule_at(identifier, fire_at, title, body, payload)

    async def cancel(self, identifier):
        self.calls.append(("cancel", identifier, None))
        await super().cancel(identifier)

    async def list_pending(self):
        self.calls.append(("list_pending", None, None))
        return await super().list_pending()

    async def cancel_all(self):
        self.calls.append(("cancel_all", None, None))
        await super().cancel_all()

    def calls_named(self, name):
        return [c for c in self.calls if c[0] == name]

    def reset_calls(self):
        self.calls.clear()


class FailingPlatform(InMemoryNotificationPlatform):
    """Every call fails, like a platform that rejects all requests."""

    async def schedule_at(self, identifier, fire_at, title, body, payload):
        raise NotificationPlatformError("permission denied")

    async def cancel(self, identifier):
        raise NotificationPlatformError("permission denied")

    async def list_pending(self):
        raise NotificationPlatformError("permission denied")

    async def cancel_all(self):
        raise NotificationPlatformError("permission denied")


def drain(store) -> None:
    """Run every queued background task (reminders, saves) to completion."""
    asyncio.run(store.executor.drain())


def run(coro):
    return asyncio.run(coro)


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        REMINDER_TIMEZONE="UTC",
        NOTIFICATION_PLATFORM="memory",
    )


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def platform():
    return RecordingPlatform()


@pytest.fixture()
def repository():
    return InMemoryCollectionRepository()


@pytest.fixture()
def store(settings, platform, repository, clock):
    """Store with in-memory collaborators; each test gets a fresh one."""
    store = build_collection_store(
        settings,
        platform=platform,
        repository=repository,
        executor=DeferredExecutor(),
        clock=clock,
    )
    yield store
    store.executor.discard()
