from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


def enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """
    Let SQLAlchemy own BEGIN on SQLite connections

    The sqlite3 driver defers BEGIN on its own, which breaks SAVEPOINT
    (used when inserting invoices); this hands transaction control back to
    SQLAlchemy.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
if engine.dialect.name == "sqlite":
    enable_sqlite_savepoints(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)
