"""Tests for termdom.app -- the event loop, demo screen and CLI."""

from __future__ import annotations

import asyncio

import pytest

from termdom import app
from termdom.app import build_demo_screen, run
from termdom.config import Config
from termdom.input_field import InputField
from termdom.registry import ViewRegistry
from termdom.screen import Screen
from termdom.views import Stack

from .virtual_terminal import VirtualTerminal


def two_fields() -> Screen:
    registry = ViewRegistry()
    root = Stack.vertical([
        registry.register_tagged("first", InputField()),
        registry.register_tagged("second", InputField()),
    ])
    return Screen(root, registry)


def text_of(screen: Screen, tag: str) -> str:
    return screen.registry.inspect_tagged(tag, InputField, lambda f: f.text)


async def wait_until(predicate, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached")
        await asyncio.sleep(0.005)


async def start(screen: Screen, terminal: VirtualTerminal, config: Config) -> asyncio.Task:
    task = asyncio.create_task(run(screen, terminal, config))
    await wait_until(lambda: terminal.started)
    return task


FAST = Config(poll_interval=0.01)


# ---------------------------------------------------------------------------
# Event loop
# ---------------------------------------------------------------------------


class TestRun:
    @pytest.mark.asyncio
    async def test_typing_then_quit(self) -> None:
        terminal = VirtualTerminal(rows=4, columns=20)
        screen = two_fields()
        task = await start(screen, terminal, FAST)

        terminal.simulate_input("hi\tthere")
        terminal.simulate_input("\x03")
        await asyncio.wait_for(task, timeout=2.0)

        assert text_of(screen, "first") == "hi"
        assert text_of(screen, "second") == "there"
        assert terminal.stop_count == 1
        assert not terminal.started

    @pytest.mark.asyncio
    async def test_renders_to_the_terminal(self) -> None:
        terminal = VirtualTerminal(rows=2, columns=10)
        screen = two_fields()
        task = await start(screen, terminal, FAST)
        await wait_until(lambda: screen.full_redraws == 1)

        terminal.clear_buffer()
        terminal.simulate_input("x")
        await wait_until(lambda: "x" in terminal.output)

        terminal.simulate_input("\x11")  # ctrl+q
        await asyncio.wait_for(task, timeout=2.0)

    @pytest.mark.asyncio
    async def test_paste(self) -> None:
        terminal = VirtualTerminal(rows=2, columns=20)
        screen = two_fields()
        task = await start(screen, terminal, FAST)

        terminal.simulate_input("\x1b[200~pasted\ntext\x1b[201~")
        terminal.simulate_input("\x03")
        await asyncio.wait_for(task, timeout=2.0)

        assert text_of(screen, "first") == "pastedtext"

    @pytest.mark.asyncio
    async def test_resize_repaints(self) -> None:
        terminal = VirtualTerminal(rows=2, columns=10)
        screen = two_fields()
        task = await start(screen, terminal, FAST)
        await wait_until(lambda: screen.full_redraws == 1)

        terminal.simulate_resize(rows=4)
        await wait_until(lambda: screen.full_redraws == 2)

        terminal.simulate_input("\x03")
        await asyncio.wait_for(task, timeout=2.0)

    @pytest.mark.asyncio
    async def test_lone_escape_is_flushed_on_timeout(self) -> None:
        terminal = VirtualTerminal(rows=2, columns=10)
        task = await start(two_fields(), terminal, Config(poll_interval=0.01, quit_keys=["escape"]))

        terminal.simulate_input("\x1b")
        await asyncio.wait_for(task, timeout=2.0)
        assert terminal.stop_count == 1

    @pytest.mark.asyncio
    async def test_configured_keybindings_apply(self) -> None:
        terminal = VirtualTerminal(rows=2, columns=10)
        screen = two_fields()
        config = Config(poll_interval=0.01, keybindings={"focusNext": "ctrl+n"})
        task = await start(screen, terminal, config)

        terminal.simulate_input("\x0eb")  # ctrl+n, then "b"
        terminal.simulate_input("\x03")
        await asyncio.wait_for(task, timeout=2.0)

        assert text_of(screen, "first") == ""
        assert text_of(screen, "second") == "b"

    @pytest.mark.asyncio
    async def test_cancel_stops_the_terminal(self) -> None:
        terminal = VirtualTerminal(rows=2, columns=10)
        task = await start(two_fields(), terminal, FAST)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert terminal.stop_count == 1


# ---------------------------------------------------------------------------
# Demo screen
# ---------------------------------------------------------------------------


class TestDemoScreen:
    def test_first_field_has_focus(self) -> None:
        screen = build_demo_screen()
        assert screen.registry.focused() is screen.registry.lookup_by_tag("input_field0")

    def test_second_field_text(self) -> None:
        screen = build_demo_screen()
        assert text_of(screen, "input_field1") == "UTF-8 文本编辑!"
        assert screen.registry.inspect_tagged(
            "input_field1", InputField, lambda f: f.content.caret_is_at_end()
        )

    def test_draws(self) -> None:
        lines = build_demo_screen().draw(80, 24).plain_lines()
        assert lines[0].startswith("HELLO")
        assert "Borders!" in lines[0]
        assert "UTF-8" in "".join(lines)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestMain:
    @pytest.fixture
    def captured(self, monkeypatch) -> dict:
        seen: dict = {}
        for name in ("TERMDOM_LOG_LEVEL", "TERMDOM_LOG_FILE", "TERMDOM_ALT_SCREEN", "TERMDOM_POLL_INTERVAL_MS"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(app, "_configure_logging", lambda config: seen.setdefault("logging", config))

        def fake_run_blocking(screen, terminal=None, config=None):
            seen["screen"] = screen
            seen["config"] = config

        monkeypatch.setattr(app, "run_blocking", fake_run_blocking)
        return seen

    def test_defaults(self, captured: dict) -> None:
        app.main([])
        config = captured["config"]
        assert config.log_level == "warning"
        assert config.use_alternate_screen
        assert captured["logging"] is config
        assert isinstance(captured["screen"], Screen)

    def test_flags(self, captured: dict) -> None:
        app.main(["--log-level", "debug", "--log-file", "out.log", "--no-alt-screen"])
        config = captured["config"]
        assert config.log_level == "debug"
        assert config.log_file == "out.log"
        assert not config.use_alternate_screen

    def test_environment(self, captured: dict, monkeypatch) -> None:
        monkeypatch.setenv("TERMDOM_LOG_LEVEL", "info")
        app.main([])
        assert captured["config"].log_level == "info"

    def test_bad_log_level(self, captured: dict) -> None:
        with pytest.raises(SystemExit):
            app.main(["--log-level", "loud"])
