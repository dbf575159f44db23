"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("PRIMARY_MODEL", "gemini-2.5-pro")
os.environ.setdefault("FALLBACK_MODEL", "gemini-2.5-flash")

import pytest

from app.services.dispatcher import ModelSelector
from app.services.model_client import ModelClient
from app.utils import metrics

PRO = "gemini-2.5-pro"
FLASH = "gemini-2.5-flash"


class FakeModelClient(ModelClient):
    """Scripted stand-in for the hosted model.

    `script` maps a model identifier to a list of replies consumed in order;
    a reply that is an Exception instance is raised instead of returned.
    """

    def __init__(self, script=None):
        self.script = {model: list(replies) for model, replies in (script or {}).items()}
        self.calls = []

    def calls_to(self, model):
        return [prompt for called, prompt in self.calls if called == model]

    async def generate(self, prompt, model):
        self.calls.append((model, prompt))
        replies = self.script.get(model)
        if not replies:
            raise AssertionError(f"unexpected call to {model}")
        reply = replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def selector():
    return ModelSelector(models=(PRO, FLASH))


@pytest.fixture
def make_client():
    return FakeModelClient


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()
