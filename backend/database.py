import logging

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.core import config


logger = logging.getLogger(__name__)


def connect_args_for(url: URL, timeout: float) -> dict:
    """Driver arguments that bound connecting and every statement by `timeout`."""
    backend = url.get_backend_name()
    if backend == 'sqlite':
        return {'timeout': timeout, 'check_same_thread': False}

    connect_timeout = max(1, int(timeout))
    if backend == 'postgresql':
        return {
            'connect_timeout': connect_timeout,
            'options': f'-c statement_timeout={int(timeout * 1000)}',
        }
    if backend in {'mysql', 'mariadb'}:
        return {
            'connect_timeout': connect_timeout,
            'read_timeout': connect_timeout,
            'write_timeout': connect_timeout,
        }
    return {'connect_timeout': connect_timeout}


def build_engine(database_url: str, timeout_seconds: float | None = None) -> Engine:
    timeout = timeout_seconds if timeout_seconds is not None else config.DATABASE_TIMEOUT_SECONDS
    url = make_url(database_url)
    if config.DATABASE_NAME and not url.database:
        url = url.set(database=config.DATABASE_NAME)

    if url.get_backend_name() == 'sqlite':
        # sqlite waits on locked database files for at most `timeout` seconds
        return create_engine(url, connect_args=connect_args_for(url, timeout))

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=timeout,
        connect_args=connect_args_for(url, timeout),
    )


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def ensure_user_schema(bind: Engine | None = None) -> None:
    """Add the role column to a users table created before roles existed."""
    bind = bind or engine
    inspector = inspect(bind)

    if 'users' not in inspector.get_table_names():
        return

    existing_columns = {column['name'] for column in inspector.get_columns('users')}
    if 'role' in existing_columns:
        return

    logger.info('Adding role column to legacy users table')
    with bind.begin() as connection:
        connection.execute(text("ALTER TABLE users ADD COLUMN role VARCHAR DEFAULT 'user'"))
        connection.execute(text("UPDATE users SET role = 'user' WHERE role IS NULL"))
