"""Settings, DatabaseManager and logging tests."""
import sys
import pytest
from unittest.mock import MagicMock
from loguru import logger

from txscope.config import Settings
from txscope.database.async_driver import AsyncPool
from txscope.database.manager import DatabaseManager
from txscope.database.sql_driver import Pool
from txscope.logging.logger import LogConfig, bind_trace_id, get_logger, reset_trace_id
from txscope.transaction import run


@pytest.fixture
def captured_logs():
    """Collect loguru records emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


class TestSettings:

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("DB_URL", "postgresql://u:p@db/app")
        monkeypatch.setenv("db_echo", "true")

        settings = Settings()

        assert settings.DB_URL == "postgresql://u:p@db/app"
        assert settings.DB_ECHO is True
        assert settings.ASYNC_DATABASE_URL == "postgresql+asyncpg://u:p@db/app"

    def test_async_url_derived_for_sqlite(self):
        settings = Settings(DB_URL="sqlite:///data.db")
        assert settings.ASYNC_DATABASE_URL == "sqlite+aiosqlite:///data.db"

    def test_explicit_async_url_wins(self):
        settings = Settings(DB_URL="sqlite:///a.db", ASYNC_DB_URL="sqlite+aiosqlite:///b.db")
        assert settings.ASYNC_DATABASE_URL == "sqlite+aiosqlite:///b.db"


class TestDatabaseManager:

    def test_singleton_builds_pools_from_settings(self, tmp_path):
        settings = Settings(DB_URL=f"sqlite:///{tmp_path}/m.db")
        manager = DatabaseManager.get_instance(settings)

        assert DatabaseManager.get_instance() is manager
        assert isinstance(manager.pool, Pool)
        assert manager.pool is manager.pool
        assert str(manager.pool.engine.url) == f"sqlite:///{tmp_path}/m.db"
        assert run(manager.pool, lambda tx: tx.query_one("SELECT 1 AS one").one) == 1

        manager.dispose()
        assert manager._pool is None

    @pytest.mark.asyncio
    async def test_async_pool(self, tmp_path):
        manager = DatabaseManager.get_instance(Settings(DB_URL=f"sqlite:///{tmp_path}/m.db"))

        assert isinstance(manager.async_pool, AsyncPool)
        assert (await manager.async_pool.query_one("SELECT 2 AS two")).two == 2

        await manager.adispose()
        assert manager._async_pool is None

    def test_reset_disposes_engines(self, tmp_path):
        manager = DatabaseManager.get_instance(Settings(DB_URL=f"sqlite:///{tmp_path}/m.db"))
        pool = manager._pool = MagicMock(spec=Pool)
        async_pool = manager._async_pool = MagicMock(spec=AsyncPool)
        async_pool.engine = MagicMock()

        DatabaseManager.reset_instance()

        pool.disconnect.assert_called_once_with()
        async_pool.engine.sync_engine.dispose.assert_called_once_with(close=False)
        assert manager._pool is None
        assert manager._async_pool is None
        assert DatabaseManager.get_instance() is not manager

    def test_reset_without_instance(self):
        DatabaseManager.reset_instance()
        assert DatabaseManager._instance is None


class TestLogging:

    def test_trace_id_resolved_when_emitted(self, captured_logs):
        log = get_logger("test")
        token = bind_trace_id("req-123")
        try:
            log.info("inside")
        finally:
            reset_trace_id(token)
        log.info("outside")

        assert captured_logs[0]["extra"]["trace_id"] == "req-123"
        assert captured_logs[0]["extra"]["name"] == "test"
        assert captured_logs[1]["extra"]["trace_id"] == "unknown"

    def test_scope_lifecycle_is_logged(self, fake_pool, captured_logs):
        run(fake_pool, lambda tx: None)

        messages = [r["message"] for r in captured_logs]
        assert "Scope opened | Kind: nestable" in messages
        assert "Scope finished | Kind: nestable" in messages

    def test_discarded_rollback_is_logged_as_warning(self, fake_pool, fake_tx, captured_logs):
        fake_tx.rollback.side_effect = RuntimeError("rollback failed")

        with pytest.raises(ValueError):
            run(fake_pool, MagicMock(side_effect=ValueError("original")))

        warnings = [r for r in captured_logs if r["level"].name == "WARNING"]
        assert len(warnings) == 1
        assert "Rollback failed and was discarded" in warnings[0]["message"]
        assert "ValueError: original" in warnings[0]["message"]
        assert str(warnings[0]["exception"].value) == "rollback failed"

    def test_setup_logging_with_file_sinks(self, tmp_path):
        settings = Settings(LOG_TO_FILE=True, LOG_DIR=str(tmp_path / "logs"), LOG_LEVEL="DEBUG")
        try:
            LogConfig.setup_logging(settings)
            get_logger("test").error("written to file")
            logger.info("unbound")
            logger.complete()

            error_log = (tmp_path / "logs" / f"{settings.APP_NAME}_error.log").read_text()
            assert "| ERROR    | test | trace=unknown | written to file" in error_log
            assert "unbound" not in error_log
            daily = [p for p in (tmp_path / "logs").iterdir() if p.name != f"{settings.APP_NAME}_error.log"]
            assert len(daily) == 1
            assert f"| {settings.APP_NAME} | trace=system | unbound" in daily[0].read_text()
        finally:
            logger.remove()
            logger.configure(extra={})
            logger.add(sys.stderr)
