import random
from pathlib import Path

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def db_session(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_file.as_posix()}")
    monkeypatch.setenv("TIMEZONE", "UTC")
    monkeypatch.setenv("SCORING_POLICY", "count")
    monkeypatch.delenv("EXPORT_ROUNDS", raising=False)

    from rollcall import models  # noqa: F401
    from rollcall.core.config import clear_settings_cache
    from rollcall.db.base import Base
    from rollcall.db.session import get_engine, get_session_factory, reset_engine
    from rollcall.services.store import init_store

    clear_settings_cache()
    reset_engine()
    Base.metadata.create_all(bind=get_engine())

    with get_session_factory()() as db:
        init_store(db)
        yield db

    Base.metadata.drop_all(bind=get_engine())
    reset_engine()
    clear_settings_cache()


@pytest.fixture()
def classroom(db_session):
    from rollcall.services.classroom import open_classroom

    room = open_classroom(db_session, rng=random.Random(1234))
    room.import_roster(
        [
            roster_entry("50000001", "Alice Adams", "aadams"),
            roster_entry("50000002", "Bob Brown", "bbrown"),
        ]
    )
    return room


@pytest.fixture()
def app_client(db_session):
    from rollcall.main import create_app

    app = create_app()
    with TestClient(app) as client:
        yield client


def roster_entry(roster_number: str, name: str, username: str):
    from rollcall.services.roster import RosterEntry

    return RosterEntry(roster_number=roster_number, name=name, username=username)


def roster_payload(*entries: tuple[str, str, str]) -> dict:
    return {
        "entries": [
            {"roster_number": number, "name": name, "username": username}
            for number, name, username in entries
        ]
    }
