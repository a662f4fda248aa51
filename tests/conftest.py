# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from teacup_ledger.core.security import create_access_token
from teacup_ledger.core.settings import THREE_DAYS_SECONDS, Settings
from teacup_ledger.db.session import Base
from teacup_ledger.main import create_app
from teacup_ledger.services.events import EventDispatcher, EventLog
from teacup_ledger.services.ledger import LedgerService

TEST_DB_URL = "sqlite://"
START_TIME = 1_700_000_000

ADMIN = "0xA11CE00000000000000000000000000000000001"
USER1 = "0x1111111111111111111111111111111111111111"
USER2 = "0x2222222222222222222222222222222222222222"
USER3 = "0x3333333333333333333333333333333333333333"

# CIDv0 is 46 characters, CIDv1 is 59.
CID_V0 = "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"
CID_V0_ALT = "QmT78zSuBmuS4z925WZfrqQ1qHaJ56DQaTfyMUF7F8ff5o"
CID_V1 = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"


class FakeClock:
    """Controllable unix-seconds clock."""

    def __init__(self, start: int = START_TIME) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> int:
        self.now += seconds
        return self.now


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture()
def make_ledger(
    session_factory: sessionmaker[Session],
    clock: FakeClock,
    event_log: EventLog,
) -> Callable[..., LedgerService]:
    """Return a factory building ledgers over the shared test database."""

    def _make(**overrides: object) -> LedgerService:
        options: dict[str, object] = {
            "admin_account": ADMIN,
            "distribution_interval": THREE_DAYS_SECONDS,
            "base_token_uri": "https://api.teacupai.com/nft/",
            "clock": clock,
            "dispatcher": EventDispatcher([event_log]),
        }
        options.update(overrides)
        return LedgerService(session_factory, **options)  # type: ignore[arg-type]

    return _make


@pytest.fixture()
def ledger(make_ledger: Callable[..., LedgerService]) -> LedgerService:
    return make_ledger()


@pytest.fixture()
def test_settings() -> Settings:
    """Settings aligned with the ledger fixtures."""
    return Settings(
        ADMIN_ACCOUNT=ADMIN,
        SECRET_KEY="teacup-test-secret",
        BASE_TOKEN_URI="https://api.teacupai.com/nft/",
    )


@pytest.fixture()
def app(
    test_settings: Settings,
    session_factory: sessionmaker[Session],
    clock: FakeClock,
) -> FastAPI:
    return create_app(test_settings, session_factory, clock=clock)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(test_settings: Settings) -> Callable[[str], dict[str, str]]:
    """Return a helper producing bearer headers for an account."""

    def _headers(account: str) -> dict[str, str]:
        token = create_access_token(account, config=test_settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers
