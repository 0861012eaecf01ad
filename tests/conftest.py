import os
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

# Must be set before anything imports talentdesk.config.
os.environ["DISABLE_DOTENV"] = "1"
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"


@pytest.fixture()
def test_db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.sqlite3"


@pytest.fixture()
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    from talentdesk import config

    path = tmp_path / "uploads"
    monkeypatch.setattr(config, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture()
def app(test_db_path: Path, upload_dir: Path, monkeypatch: pytest.MonkeyPatch) -> FastAPI:
    """
    FastAPI app wired to a temporary SQLite DB.

    Uses create_app() rather than the module-level app so no startup hook touches
    the default database.
    """
    from talentdesk import database as db

    engine = db.create_db_engine(f"sqlite+pysqlite:///{test_db_path}")
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the shared database module so router dependencies use the test DB.
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "SessionLocal", TestingSessionLocal)

    db.init_db(bind=engine)

    from talentdesk.main import create_app

    yield create_app()

    engine.dispose()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(app: FastAPI):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    from talentdesk import database

    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
