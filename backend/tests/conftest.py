import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Settings


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(
        database_url_override=f"sqlite+aiosqlite:///{tmp_path / 'results.db'}",
        debug=False,
        rephrase_provider="rules",
        rephrase_rate_limit_per_minute=0,
    )


@pytest.fixture
def client(app_settings: Settings):
    with TestClient(create_app(app_settings)) as c:
        yield c
