"""Tests for ConsoleApp line handling and command wiring."""

import asyncio
import io
from unittest.mock import AsyncMock, MagicMock

from rich.console import Console

from slashterm.cli.console.app import ConsoleApp
from slashterm.config.paths import SlashtermPaths
from slashterm.config.settings import Settings


def make_runtime():
    runtime = MagicMock()
    runtime.is_downloaded.return_value = False

    async def download(on_progress=None):
        if on_progress:
            on_progress(639, 639)

    async def chat(messages, on_stream=None):
        if on_stream:
            on_stream("hel")
            on_stream("hello")
        return "hello"

    runtime.download = AsyncMock(side_effect=download)
    runtime.load = AsyncMock()
    runtime.unload = AsyncMock()
    runtime.chat = AsyncMock(side_effect=chat)
    runtime.clear_cache = AsyncMock()
    return runtime


def make_app(tmp_path, **settings_kwargs):
    paths = SlashtermPaths(config_dir=tmp_path / "config", cache_dir=tmp_path / "cache")
    settings = Settings(models_dir=paths.models_dir, log_dir=paths.log_dir, **settings_kwargs)
    buffer = io.StringIO()
    out = Console(file=buffer, force_terminal=False, width=100)
    runtime = make_runtime()
    app = ConsoleApp(paths=paths, settings=settings, runtime=runtime, out=out)
    return app, runtime, buffer


def send(app, *lines):
    for line in lines:
        asyncio.run(app.handle_line(line))


class TestConsoleApp:
    def test_all_commands_registered(self, tmp_path):
        app, _, _ = make_app(tmp_path)
        names = {cmd.name for cmd in app.router.list()}
        assert names == {
            "help", "status", "download", "load", "unload", "clear-cache",
            "clear", "exit", "think", "no_think", "chat",
        }

    def test_download_load_chat_flow(self, tmp_path):
        app, runtime, buffer = make_app(tmp_path)

        send(app, "/download", "/load", "hi there")

        runtime.download.assert_awaited_once()
        runtime.load.assert_awaited_once()
        messages = runtime.chat.call_args.args[0]
        assert messages[-2] == {"role": "user", "content": "hi there /no_think"}
        assert app.session.chats == 1
        output = buffer.getvalue()
        assert "install complete." in output
        assert "✓ model loaded" in output
        assert "hello\n" in output

    def test_status_reflects_session_after_rebind(self, tmp_path):
        app, _, buffer = make_app(tmp_path)
        send(app, "/download", "/status --json")
        assert '"status": "downloaded"' in buffer.getvalue()

    def test_implicit_chat_needs_loaded_model(self, tmp_path):
        app, runtime, buffer = make_app(tmp_path)
        send(app, "hello")
        runtime.chat.assert_not_called()
        assert "zsh: no llm loaded" in buffer.getvalue()

    def test_implicit_chat_disabled(self, tmp_path):
        app, runtime, buffer = make_app(tmp_path, implicit_chat=False)
        send(app, "hello")
        runtime.chat.assert_not_called()
        assert "Type a /command" in buffer.getvalue()

    def test_think_changes_prompt_switch(self, tmp_path):
        app, runtime, _ = make_app(tmp_path)
        send(app, "/download", "/load", "/think", "/chat hi")
        messages = runtime.chat.call_args.args[0]
        assert messages[-2]["content"] == "hi /think"

    def test_unknown_command(self, tmp_path):
        app, _, buffer = make_app(tmp_path)
        send(app, "/frobnicate")
        assert "command not found: /frobnicate" in buffer.getvalue()

    def test_failure_reported(self, tmp_path):
        app, runtime, buffer = make_app(tmp_path)
        runtime.load.side_effect = RuntimeError("cannot reach model server")
        send(app, "/download", "/load")
        assert "Error: cannot reach model server" in buffer.getvalue()
        assert app.session.loaded is False

    def test_chat_error_after_stream_on_own_line(self, tmp_path):
        app, runtime, buffer = make_app(tmp_path)

        async def chat(messages, on_stream=None):
            on_stream("partial reply")
            raise RuntimeError("server gone")

        runtime.chat.side_effect = chat
        send(app, "/download", "/load", "/chat hi")
        assert "partial reply\nError: server gone\n" in buffer.getvalue()

    def test_interrupt_keeps_console_running(self, tmp_path):
        app, runtime, buffer = make_app(tmp_path)
        runtime.download.side_effect = KeyboardInterrupt()

        send(app, "/download")

        assert "interrupted" in buffer.getvalue()
        assert app.locked is False
        assert app.session.downloaded is False

        runtime.download.side_effect = None
        send(app, "/download")
        assert app.session.downloaded is True

    def test_cancelled_chat_keeps_console_running(self, tmp_path):
        app, runtime, buffer = make_app(tmp_path)
        runtime.chat.side_effect = asyncio.CancelledError()

        send(app, "/download", "/load", "hello")

        assert "interrupted" in buffer.getvalue()
        assert app.session.chats == 0

    def test_exit_locks_input(self, tmp_path):
        app, runtime, _ = make_app(tmp_path)
        send(app, "/exit")
        assert app.locked is True
        send(app, "/download")
        runtime.download.assert_not_called()

    def test_blank_line_ignored(self, tmp_path):
        app, _, buffer = make_app(tmp_path)
        send(app, "   ")
        assert buffer.getvalue() == ""

    def test_quit(self, tmp_path):
        app, _, _ = make_app(tmp_path)
        assert app._running is True
        app.quit()
        assert app._running is False

    def test_banner(self, tmp_path):
        app, _, buffer = make_app(tmp_path)
        app._print_banner()
        output = buffer.getvalue()
        assert output.startswith("Last login:")
        assert "run /download to install ai model (639MB)" in output


class TestVersion:
    def test_version_synced(self):
        from slashterm import __version__

        assert __version__ == "0.1.0"
