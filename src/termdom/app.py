"""Event loop and command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional

from termdom.config import Config
from termdom.decoder import InputDecoder
from termdom.input_field import InputField
from termdom.keybindings import KeybindingsManager, set_keybindings
from termdom.keys import Event, KeyEvent, ResizeEvent
from termdom.layout import Size
from termdom.registry import ViewRegistry
from termdom.screen import Screen
from termdom.style import Color, Style
from termdom.terminal import ProcessTerminal, Terminal, terminal_session
from termdom.views import Block, Paragraph, Stack, prefers_size

__all__ = ["build_demo_screen", "main", "run", "run_blocking"]

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Stdin text, or None for a resize.
_Chunk = Optional[str]


# ---------------------------------------------------------------------------
# Event loop
# ---------------------------------------------------------------------------


async def run(screen: Screen, terminal: Terminal, config: Config | None = None) -> None:
    """Drive *screen* on *terminal* until a quit key is pressed.

    Each iteration renders, then waits up to ``config.poll_interval`` for
    input.  On timeout any held-back partial escape sequence is decoded as
    is (a lone ESC becomes the escape key).
    """
    config = config if config is not None else Config()
    keybindings = config.keybindings_manager()
    set_keybindings(keybindings)

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[_Chunk] = asyncio.Queue()
    decoder = InputDecoder()

    def on_input(data: str) -> None:
        queue.put_nowait(data)

    def on_resize() -> None:
        # Signal handlers may run outside the loop's callbacks.
        loop.call_soon_threadsafe(queue.put_nowait, None)

    logger.info("Event loop starting")
    with terminal_session(terminal, on_input, on_resize):
        while True:
            screen.render(terminal)
            try:
                chunk = await asyncio.wait_for(queue.get(), timeout=config.poll_interval)
            except asyncio.TimeoutError:
                events = decoder.flush()
            else:
                events = _decode(decoder, chunk, terminal)

            if _dispatch(screen, events, keybindings):
                break
    logger.info("Event loop stopped")


def _decode(decoder: InputDecoder, chunk: _Chunk, terminal: Terminal) -> list[Event]:
    if chunk is None:
        return [ResizeEvent(terminal.columns, terminal.rows)]
    return decoder.feed(chunk)


def _dispatch(screen: Screen, events: list[Event], keybindings: KeybindingsManager) -> bool:
    """Hand *events* to the screen; return True on a quit key."""
    for event in events:
        if (
            isinstance(event, KeyEvent)
            and event.kind != "release"
            and keybindings.matches(event, "quit")
        ):
            logger.debug("Quit key %s", event.id)
            return True
        screen.handle_event(event)
    return False


def run_blocking(
    screen: Screen,
    terminal: Terminal | None = None,
    config: Config | None = None,
) -> None:
    """``asyncio.run`` wrapper around :func:`run` using the real terminal by default."""
    config = config if config is not None else Config()
    if terminal is None:
        terminal = ProcessTerminal(use_alternate_screen=config.use_alternate_screen)
    asyncio.run(run(screen, terminal, config))


# ---------------------------------------------------------------------------
# Demo
# ---------------------------------------------------------------------------


def _borders(fg: Color) -> Block:
    return Block(style=Style(fg=fg))


def build_demo_screen() -> Screen:
    """Two paragraphs beside a column of two tagged input fields."""
    registry = ViewRegistry()

    root = Stack.horizontal([
        prefers_size(
            Paragraph("HELLO\n(This view has a preferred size of 16*16)")
            .bg(Color.LIGHT_YELLOW)
            .fg(Color.BLACK)
            .wrapped(),
            (16, 16),
        ),
        Paragraph(
            "WORLD\n(This view doesn't have a preferred size, "
            "it just spreads out equally with other views)"
        )
        .bg(Color.LIGHT_CYAN)
        .fg(Color.BLACK)
        .boxed(_borders(Color.LIGHT_RED).with_title("Borders!"))
        .wrapped(),
        Stack.vertical([
            registry.register_tagged(
                "input_field0",
                InputField(placeholder="Type something here...").with_blocks(
                    _borders(Color.LIGHT_YELLOW), _borders(Color.DARK_GRAY)
                ),
            ),
            prefers_size(
                registry.register_tagged(
                    "input_field1",
                    InputField(placeholder="Type something here...")
                    .with_text("UTF-8 文本编辑!")
                    .caret_at_end()
                    .with_blocks(_borders(Color.LIGHT_YELLOW), _borders(Color.DARK_GRAY)),
                ),
                Size(0, 4),
            ),
        ]),
    ])
    return Screen(root, registry)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _configure_logging(config: Config) -> None:
    if config.log_file:
        logging.basicConfig(
            level=getattr(logging, config.log_level.upper(), logging.WARNING),
            format=_LOG_FORMAT,
            filename=config.log_file,
        )
    else:
        # stderr is shared with the UI; only report what matters.
        logging.basicConfig(level=logging.WARNING, format=_LOG_FORMAT)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="termdom", description="termdom demo screen")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: warning, or TERMDOM_LOG_LEVEL)",
    )
    parser.add_argument("--log-file", default=None, help="Write logs to this file")
    parser.add_argument(
        "--no-alt-screen",
        action="store_true",
        help="Draw on the main screen instead of the alternate screen",
    )
    args = parser.parse_args(argv)

    config = Config.from_env()
    if args.log_level:
        config.log_level = args.log_level
    if args.log_file:
        config.log_file = args.log_file
    if args.no_alt_screen:
        config.use_alternate_screen = False

    _configure_logging(config)
    run_blocking(build_demo_screen(), config=config)


if __name__ == "__main__":
    main()
