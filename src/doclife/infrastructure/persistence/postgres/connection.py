"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. Caller must call await pool.open()
    before use (e.g. via LifespanMiddleware in ASGI lifespan).
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )


async def check_connection(pool: AsyncConnectionPool) -> bool:
    """Readiness probe: True if a pooled connection answers ``SELECT 1``."""
    try:
        async with pool.connection(timeout=5.0) as conn:
            cur = await conn.execute("SELECT 1")
            return (await cur.fetchone()) is not None
    except Exception:
        return False
