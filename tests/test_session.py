"""Tests for the session state and its actions."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from slashterm.cli.console.context import SessionState
from slashterm.config.settings import Settings
from slashterm.core.session import Session


def make_runtime(downloaded=False):
    runtime = MagicMock()
    runtime.is_downloaded.return_value = downloaded
    runtime.download = AsyncMock()
    runtime.load = AsyncMock()
    runtime.unload = AsyncMock()
    runtime.chat = AsyncMock(return_value="hi there")
    runtime.clear_cache = AsyncMock()
    return runtime


class TestSession:
    def test_initial_snapshot(self):
        session = Session(Settings(model_name="tiny", model_size_mb=42), make_runtime())
        state = session.snapshot()
        assert state == SessionState(
            downloaded=False,
            loaded=False,
            chats=0,
            model_name="tiny",
            model_size_mb=42,
            thinking=False,
        )

    def test_downloaded_from_runtime(self):
        session = Session(Settings(), make_runtime(downloaded=True))
        assert session.snapshot().downloaded is True

    def test_thinking_default_from_settings(self):
        session = Session(Settings(thinking=True), make_runtime())
        assert session.snapshot().thinking is True

    def test_snapshot_is_frozen(self):
        session = Session(Settings(), make_runtime())
        state = session.snapshot()
        with pytest.raises(AttributeError):
            state.loaded = True

    def test_snapshot_not_live(self):
        session = Session(Settings(), make_runtime())
        before = session.snapshot()
        session.set_thinking(True)
        assert before.thinking is False
        assert session.snapshot().thinking is True

    def test_lifecycle(self):
        runtime = make_runtime()
        session = Session(Settings(), runtime)
        progress = MagicMock()

        asyncio.run(session.download(progress))
        runtime.download.assert_awaited_once_with(progress)
        assert session.snapshot().downloaded is True

        asyncio.run(session.load())
        assert session.snapshot().loaded is True

        asyncio.run(session.unload())
        state = session.snapshot()
        assert state.loaded is False
        assert state.downloaded is True

    def test_clear_cache_resets(self):
        session = Session(Settings(), make_runtime(downloaded=True))
        asyncio.run(session.load())
        asyncio.run(session.clear_cache())
        state = session.snapshot()
        assert state.loaded is False
        assert state.downloaded is False

    def test_chat_success(self):
        runtime = make_runtime()
        session = Session(Settings(system_prompt="be brief"), runtime)
        stream = MagicMock()

        result = asyncio.run(session.chat("hello", stream))

        assert result == "hi there"
        assert session.chats == 1
        assert session.conversation == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": "hi there"},
        ]
        runtime.chat.assert_awaited_once_with(session.conversation, stream)

    def test_chat_failure_drops_user_turn(self):
        runtime = make_runtime()
        runtime.chat.side_effect = RuntimeError("server gone")
        session = Session(Settings(system_prompt="be brief"), runtime)

        with pytest.raises(RuntimeError):
            asyncio.run(session.chat("hello"))

        assert session.chats == 0
        assert session.conversation == [{"role": "system", "content": "be brief"}]

    def test_chat_cancelled_drops_user_turn(self):
        runtime = make_runtime()
        runtime.chat.side_effect = asyncio.CancelledError()
        session = Session(Settings(system_prompt="be brief"), runtime)

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(session.chat("hello"))

        assert session.conversation == [{"role": "system", "content": "be brief"}]

    def test_as_context(self):
        session = Session(Settings(), make_runtime())
        ctx = session.as_context()
        assert ctx.actions is session
        session.set_thinking(True)
        assert ctx.get_state().thinking is True
