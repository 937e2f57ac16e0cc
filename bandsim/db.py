from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bandsim.load_settings import database_backend

if database_backend == "postgres":
    from bandsim.create_postgres_engine import engine
else:
    from bandsim.create_sqlite_engine import engine

# Centralized session factory to avoid creating it in router modules.
Session = async_sessionmaker(
    autocommit=False,
    class_=AsyncSession,
    autoflush=True,
    bind=engine,
)
