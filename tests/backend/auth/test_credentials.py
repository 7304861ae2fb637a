import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.auth.credentials import CredentialStore, UserRecord
from backend.core.errors import DuplicateEmailError, InternalError
from backend.database import ensure_user_schema
from backend.models.user import Role


def _record(email: str, name: str = 'Ann') -> UserRecord:
    return UserRecord(email=email, name=name, password_hash='$2b$04$hash')


def test_find_by_email_returns_none_for_unknown_email(credential_store) -> None:
    assert credential_store.find_by_email('nobody@x.com') is None


def test_insert_then_find(credential_store) -> None:
    credential_store.insert(_record('ann@x.com'))

    assert credential_store.find_by_email('ann@x.com') == _record('ann@x.com')


def test_insert_duplicate_email_hits_unique_constraint(credential_store) -> None:
    credential_store.insert(_record('ann@x.com'))

    with pytest.raises(DuplicateEmailError):
        credential_store.insert(_record('ann@x.com', name='Ann Again'))

    assert len(credential_store.list_all()) == 1


def test_set_role_updates_only_role(credential_store) -> None:
    credential_store.insert(_record('ann@x.com'))

    assert credential_store.set_role('ann@x.com', Role.ADMIN) == 1

    record = credential_store.find_by_email('ann@x.com')
    assert record.role == 'admin'
    assert record.name == 'Ann'
    assert record.password_hash == '$2b$04$hash'


def test_set_role_for_unknown_email_is_a_no_op(credential_store) -> None:
    assert credential_store.set_role('ghost@x.com', Role.ADMIN) == 0


def test_list_all_keeps_insertion_order(credential_store) -> None:
    for email in ('c@x.com', 'a@x.com', 'b@x.com'):
        credential_store.insert(_record(email))

    assert [record.email for record in credential_store.list_all()] == ['c@x.com', 'a@x.com', 'b@x.com']


def test_missing_role_reads_as_user(credential_store, session_factory) -> None:
    db = session_factory()
    try:
        db.execute(text(
            "INSERT INTO users (email, name, hashed_password, role) VALUES ('old@x.com', 'Old', '$2b$04$hash', NULL)"
        ))
        db.commit()
    finally:
        db.close()

    assert credential_store.find_by_email('old@x.com').role == 'user'


def test_storage_failure_raises_internal_error(broken_session_factory) -> None:
    store = CredentialStore(broken_session_factory)

    with pytest.raises(InternalError):
        store.find_by_email('ann@x.com')


def test_ensure_user_schema_adds_role_column_to_legacy_table() -> None:
    engine = create_engine('sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool)
    with engine.begin() as connection:
        connection.execute(text(
            'CREATE TABLE users (id INTEGER PRIMARY KEY, email VARCHAR UNIQUE, name VARCHAR, hashed_password VARCHAR)'
        ))
        connection.execute(text(
            "INSERT INTO users (email, name, hashed_password) VALUES ('old@x.com', 'Old', '$2b$04$hash')"
        ))

    ensure_user_schema(engine)
    ensure_user_schema(engine)

    store = CredentialStore(sessionmaker(bind=engine))
    assert store.find_by_email('old@x.com').role == 'user'
    engine.dispose()
