from __future__ import annotations

import pytest

from collabsync.config import ApiConfig
from collabsync.domain.events import EventBus
from tests.helpers.fakes import (
    FakeAddressbookClient,
    FakeCollaborationClient,
    RecordingEmitter,
    RecordingNotifier,
)

CURRENT_USER_ID = "123"


@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(
        base_url="https://groupware.test/api",
        api_token="token",
        user_id=CURRENT_USER_ID,
    )


@pytest.fixture
def addressbook_client() -> FakeAddressbookClient:
    return FakeAddressbookClient()


@pytest.fixture
def collaboration_client() -> FakeCollaborationClient:
    return FakeCollaborationClient()


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()
