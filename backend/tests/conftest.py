import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from giftai import main
from giftai.api.deps import get_current_user, get_gift_llm
from giftai.config import Settings, get_settings
from giftai.services.auth.supabase_auth import AuthUser
from giftai.storage import db as db_module
from giftai.storage.db import enable_sqlite_foreign_keys, get_db_session

AUTH_URL = "https://auth.test"


class FakeGiftLLM:
    """Stands in for GiftLLM: replies are queued per prompt name; exceptions are raised."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.model = settings.llm_model_id
        self.replies: dict[str, list] = {}
        self.calls: list[dict] = []

    @property
    def configured(self) -> bool:
        return bool(self.settings.llm_api_key)

    def queue(self, prompt_name: str, *replies) -> None:
        self.replies.setdefault(prompt_name, []).extend(replies)

    def complete(self, prompt_name, prompt_version, prompt, *, sampling):
        self.calls.append(
            {"name": prompt_name, "version": prompt_version, "sampling": sampling, "prompt_template": prompt}
        )
        reply = self.replies[prompt_name].pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def call_names(self) -> list[str]:
        return [c["name"] for c in self.calls]


def make_suggestion(name: str = "Leather Journal") -> dict:
    return {
        "name": name,
        "description": f"A {name.lower()} for everyday use.",
        "reason": "Fits a thoughtful, organised personality.",
        "shopping_links": [
            {
                "platform": "Amazon",
                "url": "https://amazon.com/s?k=leather+journal+women+adult&rh=p_36%3A3500-5500",
                "price_range": "$35-55",
            }
        ],
    }


@pytest.fixture(name="suggestions")
def suggestions_fixture() -> list[dict]:
    return [make_suggestion("Leather Journal"), make_suggestion("Pour Over Coffee Set"), make_suggestion("Cooking Class")]


@pytest.fixture(name="suggestions_json")
def suggestions_json_fixture(suggestions) -> str:
    return json.dumps(suggestions)


@pytest.fixture(name="criteria")
def criteria_fixture() -> dict:
    return {
        "occasion": "Birthday",
        "age": 30,
        "gender": "Female",
        "personality": "Creative, loves coffee and journaling",
        "budget": 50,
        "geography": "10001",
    }


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    return Settings(
        _env_file=None,
        llm_api_key="test-key",
        supabase_url=AUTH_URL,
        supabase_anon_key="anon-key",
    )


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="fake_llm")
def fake_llm_fixture(settings) -> FakeGiftLLM:
    return FakeGiftLLM(settings)


@pytest.fixture(name="user")
def user_fixture() -> AuthUser:
    return AuthUser(id="user-1", email="ada@example.com", email_confirmed_at="2026-01-01T00:00:00Z")


@pytest.fixture(name="client")
def client_fixture(monkeypatch, engine, settings, fake_llm):
    def _db_session_override():
        with Session(engine) as session:
            yield session

    monkeypatch.setattr(db_module, "engine", engine)
    app = main.app
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_gift_llm] = lambda: fake_llm
    app.dependency_overrides[get_db_session] = _db_session_override

    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(name="authed_client")
def authed_client_fixture(client, user):
    main.app.dependency_overrides[get_current_user] = lambda: user
    return client
