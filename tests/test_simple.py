"""
Simple test cases to verify test configuration.
"""
import pytest
from sqlalchemy import text

import txscope
from txscope.database.async_driver import AsyncPool
from txscope.database.sql_driver import Pool

def test_public_api():
    """Test that the package exposes its entry points."""
    for name in ("run", "arun", "new_transactor", "new_async_transactor", "UnitOfWork", "Pool"):
        assert hasattr(txscope, name)

def test_database_pool(pool: Pool):
    """Test that the sync pool works."""
    assert pool.query_one(text("SELECT 1")) == (1,)

@pytest.mark.asyncio
async def test_async_database_pool(async_pool: AsyncPool):
    """Test that the async pool works."""
    assert await async_pool.query_one("SELECT 1") == (1,)
