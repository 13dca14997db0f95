"""Shared test fixtures and fakes."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from convo_cli.client import ChatReply
from convo_cli.config import SessionConfig
from convo_cli.models import Conversation, Message, MessageRole, Usage


class FakeChatClient:
    """Replays scripted replies or exceptions, one per call."""

    def __init__(self, *results, events: list[str] | None = None):
        self._results = list(results)
        self.calls: list[tuple[list[dict[str, str]], str, float]] = []
        self.events = events if events is not None else []
        self.closed = False

    def complete(self, conversation: Conversation, model: str, temperature: float) -> ChatReply:
        self.calls.append((conversation.to_openai_messages(), model, temperature))
        self.events.append("remote")
        result = self._results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class ScriptedInput:
    """Stands in for interactive input; raises EOFError once lines run out."""

    def __init__(self, *lines: str, events: list[str] | None = None):
        self._lines = list(lines)
        self.prompts: list[str] = []
        self.events = events if events is not None else []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.events.append("prompt")
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)


def assistant_reply(content: str, prompt_tokens: int = 10, completion_tokens: int = 5) -> ChatReply:
    return ChatReply(
        message=Message(role=MessageRole.ASSISTANT, content=content),
        usage=Usage(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
        raw="{}",
    )


@pytest.fixture
def session_config(tmp_path: Path) -> SessionConfig:
    return SessionConfig(
        api_key="sk-test",
        model="openai/gpt-4o-mini",
        url="https://llm.example.com/v1/chat/completions",
        temperature=0.7,
        input_dir=tmp_path / "input",
        prompts_dir=tmp_path / "prompts",
        logs_dir=tmp_path / "logs",
    )


@pytest.fixture
def console_output() -> StringIO:
    return StringIO()


@pytest.fixture
def console(console_output: StringIO) -> Console:
    return Console(file=console_output, width=120)
