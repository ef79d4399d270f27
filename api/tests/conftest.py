"""
Pytest configuration and shared fixtures.

Provides:
- Settings that never read the developer's .env
- A scripted stand-in for the Claude client
- The FastAPI app wired to that stand-in, and an in-process HTTP client
"""

import json

import httpx
import pytest

from burmafoodie.client.storage import LocalStorage
from burmafoodie.config import Settings
from burmafoodie.main import create_app
from burmafoodie.services.recipe import RecipeRequestHandler

MOHINGA = {
    "responseType": "recipe",
    "dishName": "Mohinga",
    "ingredients": [
        {"name": "Rice vermicelli", "amount": "400g"},
        {"name": "Catfish", "amount": "500g"},
        {"name": "Lemongrass", "amount": "3 stalks"},
    ],
    "instructions": [
        "Simmer the fish with lemongrass.",
        "Thicken the broth with toasted rice flour.",
        "Serve over noodles.",
    ],
    "calories": "450 kcal",
}


class FakeLLM:
    """Returns the scripted reply (or raises it) and records every call."""

    def __init__(self, reply="", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    async def generate(self, system, prompt, image=None):
        self.calls.append({"system": system, "prompt": prompt, "image": image})
        if self.error is not None:
            raise self.error
        return self.reply


def make_settings(**overrides) -> Settings:
    values = {
        "anthropic_api_key": "sk-test-key",
        "prometheus_enabled": False,
        "default_language": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM(reply=json.dumps(MOHINGA))


@pytest.fixture
def handler(settings, fake_llm) -> RecipeRequestHandler:
    return RecipeRequestHandler(settings, llm=fake_llm)


@pytest.fixture
def app(settings, handler):
    return create_app(settings, recipe_handler=handler)


@pytest.fixture
async def http_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage.json")
