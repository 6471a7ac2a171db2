import os
import tempfile
from pathlib import Path

os.environ["APP_ENV"] = "test"
os.environ["ENV_FILE"] = os.devnull
os.environ.setdefault("API_KEY", "test-api-key")
os.environ.setdefault(
    "DATABASE_URL", f"sqlite:///{Path(tempfile.gettempdir()) / 'statsync-test.db'}"
)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from statsync.api.deps import get_upsert_service
from statsync.db.session import init_db
from statsync.main import app
from statsync.services.player_stats import BatchUpsertService

API_KEY = os.environ["API_KEY"]


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'stats.db'}",
        connect_args={"check_same_thread": False},
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def service(session_factory):
    return BatchUpsertService(session_factory)


@pytest.fixture
def read_rows(engine):
    def _read():
        with engine.connect() as conn:
            rows = conn.execute(
                text(
                    "SELECT player_name, team_name, status, kills, deaths, assists, kda, "
                    "games_played, avg_kills, avg_deaths, avg_assists, avg_kda, cs, avg_cs, "
                    "last_updated FROM player_stats ORDER BY player_name, team_name"
                )
            ).mappings().all()
        return [dict(row) for row in rows]

    return _read


@pytest.fixture
def client(service):
    app.dependency_overrides[get_upsert_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"x-api-key": API_KEY}
