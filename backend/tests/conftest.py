"""Shared fakes for the Groq client and the database."""

import os
import sys
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Keep the app import from touching a real database file.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from hirely.services import ai_client


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeStream:
    """Async iterator over canned chunks that records whether it was closed."""

    def __init__(self, chunks):
        self._chunks = list(chunks)
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._chunks:
            raise StopAsyncIteration
        content = self._chunks.pop(0)
        return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])

    async def close(self):
        self.closed = True


class FakeGroq:
    """Stands in for AsyncGroq. Replies are consumed in order; the last one repeats.

    A reply may be a string (message content), None (no content), an
    exception (raised), or a list of chunks (for stream=True calls).
    """

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []
        self.streams = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        if kwargs.get("stream"):
            stream = FakeStream(reply)
            self.streams.append(stream)
            return stream
        return _response(reply)

    @property
    def call_count(self):
        return len(self.calls)


@pytest.fixture
def fake_groq(monkeypatch):
    """Install a FakeGroq behind ai_client and return it."""

    def install(*replies):
        fake = FakeGroq(replies)
        monkeypatch.setattr(ai_client, "_get_client", lambda: fake)
        return fake

    return install
