"""
Tests for the database URL normalisation in config.Settings
"""

import pytest

from config import Settings


@pytest.mark.parametrize("url, expected", [
    ("postgresql://app:secret@db:5432/customers", "postgresql+asyncpg://app:secret@db:5432/customers"),
    ("postgres://app:secret@db:5432/customers", "postgresql+asyncpg://app:secret@db:5432/customers"),
    ("postgresql+asyncpg://app@db/customers", "postgresql+asyncpg://app@db/customers"),
    ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
])
def test_database_url_uses_asyncpg(monkeypatch, url, expected):
    monkeypatch.setattr(Settings, "DATABASE_URL", url)
    assert Settings.get_database_url() == expected


def test_lambda_detection(monkeypatch):
    monkeypatch.delenv("AWS_LAMBDA_FUNCTION_NAME", raising=False)
    assert Settings.is_lambda_environment() is False

    monkeypatch.setenv("AWS_LAMBDA_FUNCTION_NAME", "customer-service")
    assert Settings.is_lambda_environment() is True
