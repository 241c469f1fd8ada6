from typing import Optional
from .async_driver import AsyncPool
from .sql_driver import Pool

class DatabaseManager:
    _instance = None

    def __init__(self, settings):
        self.settings = settings
        self._pool: Optional[Pool] = None
        self._async_pool: Optional[AsyncPool] = None

    @classmethod
    def get_instance(cls, settings=None):
        if cls._instance is None:
            if settings is None:
                from txscope.config import settings as app_settings
                settings = app_settings
            cls._instance = cls(settings)
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Drop the singleton after disposing the engines it built."""
        instance, cls._instance = cls._instance, None
        if instance is None:
            return
        instance.dispose()
        if instance._async_pool is not None:
            # Outside an event loop pooled async connections can only be dereferenced
            instance._async_pool.engine.sync_engine.dispose(close=False)
            instance._async_pool = None

    @property
    def pool(self) -> Pool:
        """Sync pool handle; the engine is created on first use."""
        if self._pool is None:
            self._pool = Pool.from_url(
                self.settings.DB_URL,
                echo=self.settings.DB_ECHO,
                pool_pre_ping=self.settings.DB_POOL_PRE_PING,
            )
        return self._pool

    @property
    def async_pool(self) -> AsyncPool:
        if self._async_pool is None:
            self._async_pool = AsyncPool.from_url(
                self.settings.ASYNC_DATABASE_URL,
                echo=self.settings.DB_ECHO,
                pool_pre_ping=self.settings.DB_POOL_PRE_PING,
            )
        return self._async_pool

    def dispose(self):
        if self._pool is not None:
            self._pool.disconnect()
            self._pool = None

    async def adispose(self):
        if self._async_pool is not None:
            await self._async_pool.disconnect()
            self._async_pool = None
