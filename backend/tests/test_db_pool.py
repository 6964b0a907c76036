import asyncio

import pytest

import db.pool
from core.config import Settings
from db.pool import database_pool


class HangingEngine:
    """Engine whose first connection never completes."""

    def __init__(self):
        self.disposed = False
        self.dialect = None

    def begin(self):
        return self

    async def __aenter__(self):
        await asyncio.sleep(60)

    async def __aexit__(self, *exc_info):
        return False

    async def dispose(self):
        self.disposed = True


@pytest.mark.asyncio
async def test_setup_timeout_disposes_engine(monkeypatch):
    engine = HangingEngine()
    monkeypatch.setattr(db.pool, "create_async_engine", lambda url, **kwargs: engine)

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(
            database_pool.setup(Settings(database_url_override="sqlite+aiosqlite:///:memory:")),
            timeout=0.05,
        )

    assert engine.disposed
    assert not database_pool.is_available()


@pytest.mark.asyncio
async def test_setup_and_close(tmp_path):
    await database_pool.setup(Settings(database_url_override=f"sqlite+aiosqlite:///{tmp_path / 'pool.db'}"))
    try:
        assert database_pool.is_available()
    finally:
        await database_pool.close()

    assert not database_pool.is_available()
