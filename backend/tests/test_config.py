import os

import pytest

from seedstore.config import DEFAULT_DATABASE_URL, _as_bool, normalize_database_url, settings


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, DEFAULT_DATABASE_URL),
        ("   ", DEFAULT_DATABASE_URL),
        ("teststore", "sqlite:///teststore"),
        ("./data/store.db", "sqlite:///./data/store.db"),
        ("sqlite://sqlite.db", "sqlite:///sqlite.db"),
        ("sqlite:///relative.db", "sqlite:///relative.db"),
        ("sqlite:////var/lib/store.db", "sqlite:////var/lib/store.db"),
        ('"sqlite:///quoted.db"', "sqlite:///quoted.db"),
        ("SQLITE:///upper.db", "sqlite:///upper.db"),
    ],
)
def test_normalize_database_url(raw, expected):
    assert normalize_database_url(raw) == expected


def test_normalize_database_url_uses_fallback():
    assert normalize_database_url(None, fallback="sqlite:///other.db") == "sqlite:///other.db"


def test_as_bool():
    assert _as_bool(None, True) is True
    assert _as_bool("yes", False) is True
    assert _as_bool("0", True) is False


def test_settings_env_follows_environment():
    assert settings.env == os.getenv("ENV", "development").strip().lower()
