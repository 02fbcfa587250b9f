from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from app.core.config import settings


def _enable_sqlite_transactions(engine: Engine) -> None:
    """
    Make SQLite behave like a transactional store for the booking flow.

    pysqlite opens transactions lazily and never around plain SELECTs; here
    the driver's own handling is switched off and every SQLAlchemy transaction
    starts with BEGIN IMMEDIATE. Concurrent writers then wait on the busy
    timeout instead of failing, and a read transaction sees one snapshot.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})
        _enable_sqlite_transactions(engine)
        return engine
    # For PostgreSQL, we might need to adjust pool_size and max_overflow in production
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def begin_snapshot(db: Session) -> None:
    """Pin the session's next transaction to a single consistent snapshot.

    Must be called before the session has issued any statement.
    """
    if db.get_bind().dialect.name == "postgresql":
        db.connection(execution_options={"isolation_level": "REPEATABLE READ"})
