import psycopg2
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT
from sqlalchemy.engine import make_url
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

def create_database():
    """Create the PostgreSQL database if it doesn't exist. No-op for other backends."""
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() != "postgresql":
        logger.info("Using %s store, skipping database creation.", url.get_backend_name())
        return

    try:
        # Connect to default 'postgres' database to check/create target DB
        con = psycopg2.connect(
            user=url.username,
            password=url.password,
            host=url.host,
            port=url.port or 5432,
            dbname="postgres"
        )
        con.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
        cur = con.cursor()

        cur.execute("SELECT 1 FROM pg_catalog.pg_database WHERE datname = %s", (url.database,))
        exists = cur.fetchone()

        if not exists:
            logger.info("Database %s does not exist. Creating...", url.database)
            cur.execute(f'CREATE DATABASE "{url.database}"')
            logger.info("Database %s created successfully.", url.database)
        else:
            logger.info("Database %s already exists.", url.database)

        cur.close()
        con.close()
    except psycopg2.Error as e:
        logger.error("Error creating database: %s", e)
        # Proceeding anyway, maybe it exists or connection params are for the target DB directly


def init_db(engine) -> None:
    """Create the store (if needed) and every table of the booking schema."""
    from app.db.base import Base

    create_database()
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    from app.db.session import engine

    logging.basicConfig(level=logging.INFO)
    init_db(engine)
