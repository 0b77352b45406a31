"""Unit tests for the global session helpers."""

from unittest.mock import AsyncMock, patch

from sqlalchemy.ext.asyncio import AsyncSession

from cityprefs.core.database import session as db_session


async def test_get_session_yields_async_session():
    generator = db_session.get_session()
    session = await generator.__anext__()
    try:
        assert isinstance(session, AsyncSession)
    finally:
        await generator.aclose()


async def test_init_db_skips_without_auto_create():
    with (
        patch.object(db_session.settings, "db_auto_create", False),
        patch.object(db_session, "create_all", new_callable=AsyncMock) as create_all,
    ):
        await db_session.init_db()
    create_all.assert_not_awaited()


async def test_init_db_creates_tables_when_enabled():
    with (
        patch.object(db_session.settings, "db_auto_create", True),
        patch.object(db_session, "create_all", new_callable=AsyncMock) as create_all,
    ):
        await db_session.init_db()
    create_all.assert_awaited_once_with(db_session.engine)
