from __future__ import annotations

import asyncio

import pytest

from assistkit import config
from assistkit.services import claude_client, notifier, reply_generator

ENV_KEYS = [
    "ANTHROPIC_API_KEY",
    "ASSISTKIT_CLAUDE_MODEL",
    "ASSISTKIT_VISION_MODEL",
    "ASSISTKIT_GENERATION_TIMEOUT",
    "ASSISTKIT_FORM_URL",
    "ASSISTKIT_FORM_ENTRIES",
    "ASSISTKIT_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch, tmp_path):
    """Give every test a clean environment and fresh module-level singletons."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "missing-config.toml")
    monkeypatch.setattr(config, "_settings", None)
    monkeypatch.setattr(claude_client, "_client", None)
    monkeypatch.setattr(notifier, "_notifier", None)
    monkeypatch.setattr(reply_generator, "_session", None)
    yield


class FakeClaude:
    """Stands in for ClaudeClient; records prompts and returns canned answers."""

    def __init__(self, answer: str = "", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.prompts: list[str] = []
        self.images: list[str] = []

    async def ask(self, prompt: str, temperature: float = 0.2, max_tokens: int = 1024) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer

    async def read_image(self, image_base64: str, instruction: str, **kwargs) -> str:
        self.images.append(image_base64)
        self.prompts.append(instruction)
        if self.error is not None:
            raise self.error
        return self.answer


class ControlledGenerator:
    """Generation callable whose calls stay pending until the test resolves them."""

    def __init__(self):
        self.calls: list[tuple[str, str, asyncio.Future]] = []

    async def __call__(self, source_text: str, modifier: str) -> str:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((source_text, modifier, future))
        return await future

    def calls_for(self, modifier: str) -> list[asyncio.Future]:
        return [future for _, mod, future in self.calls if mod == modifier]

    def succeed(self, modifier: str, text: str, index: int = -1) -> None:
        self.calls_for(modifier)[index].set_result(text)

    def fail(self, modifier: str, message: str, index: int = -1) -> None:
        self.calls_for(modifier)[index].set_exception(RuntimeError(message))


async def settle(rounds: int = 10) -> None:
    """Let scheduled tasks run until they block again."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def fake_claude(monkeypatch):
    client = FakeClaude(answer="ok")
    monkeypatch.setattr(claude_client, "_client", client)
    return client
