"""
Pytest configuration and fixtures for beeper-desktop-api tests.
"""

import pytest
import responses as responses_lib

from src.beeper_desktop.client import BeeperDesktop
from src.beeper_desktop.core.logging.config import LoggingConfig

TOKEN = "bdt_test_0123456789abcdef"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests never see the developer's real Beeper settings."""
    for name in (
        "BEEPER_ACCESS_TOKEN",
        "BEEPER_DESKTOP_ACCESS_TOKEN",
        "BEEPER_DESKTOP_BASE_URL",
        "BEEPER_DESKTOP_TIMEOUT",
        "BEEPER_DESKTOP_MAX_RETRIES",
        "BEEPER_DESKTOP_RETRY_BACKOFF",
        "BEEPER_DESKTOP_LOG_LEVEL",
        "BEEPER_DESKTOP_LOG_FORMAT",
        "BEEPER_DESKTOP_LOG_FILE_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def token():
    return TOKEN


@pytest.fixture
def base_url():
    """Base URL for testing (normalized form, with trailing slash)."""
    return "http://localhost:23373/"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client(base_url):
    """Sync client without delays between retries."""
    client = BeeperDesktop(access_token=TOKEN, base_url=base_url, retry_backoff=0)
    yield client
    client.close()


@pytest.fixture
def logging_config():
    """Standard logging configuration for tests that need log output."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )


def _user(user_id="@alice:beeper.local", **extra):
    data = {"id": user_id, "fullName": "Alice"}
    data.update(extra)
    return data


def _chat(chat_id="!room:beeper.local", **extra):
    data = {
        "id": chat_id,
        "accountID": "whatsapp",
        "network": "WhatsApp",
        "title": "Team",
        "type": "group",
        "unreadCount": 0,
        "participants": {"hasMore": False, "items": [_user()], "total": 1},
    }
    data.update(extra)
    return data


def _message(message_id="m1", chat_id="!room:beeper.local", **extra):
    data = {
        "id": message_id,
        "accountID": "whatsapp",
        "chatID": chat_id,
        "messageID": message_id,
        "senderID": "@alice:beeper.local",
        "sortKey": "1",
        "timestamp": "2024-05-01T10:00:00Z",
        "senderName": "Alice",
        "text": f"text of {message_id}",
    }
    data.update(extra)
    return data


@pytest.fixture
def make_user():
    """Factory of wire-format users."""
    return _user


@pytest.fixture
def make_chat():
    """Factory of wire-format chats."""
    return _chat


@pytest.fixture
def make_message():
    """Factory of wire-format messages."""
    return _message
