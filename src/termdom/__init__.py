"""termdom: retained-mode terminal widgets with a focus ring and UTF-8 text editing."""

# Event loop
from termdom.app import build_demo_screen, run, run_blocking

# View cells
from termdom.cell import ViewCell, ViewCellRef, ViewTypeMismatch

# Clipboard
from termdom.clipboard import Clipboard, ClipboardError, MemoryClipboard, SystemClipboard

# Configuration
from termdom.config import Config

# Text editing model
from termdom.content import Caret, Cursor, Selection, TextContent

# Input decoding
from termdom.decoder import InputDecoder

# Errors
from termdom.errors import TermdomError

# Rendering
from termdom.frame import Cell, Frame

# Widgets
from termdom.input_field import InputField

# Keybindings
from termdom.keybindings import (
    DEFAULT_KEYBINDINGS,
    Action,
    KeybindingsConfig,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)

# Keyboard events
from termdom.keys import Event, Key, KeyEvent, KeyId, PasteEvent, ResizeEvent, parse_key_event

# Layout
from termdom.layout import (
    Constraint,
    Direction,
    Fill,
    LayoutError,
    Length,
    Percentage,
    Ratio,
    Rect,
    Size,
    equal_constraints,
    split,
)

# Codepoint navigation
from termdom.navigator import BoundaryError, codepoint_len, is_boundary, next_boundary, prev_boundary

# Focus ring
from termdom.registry import ViewRegistry

# Screen
from termdom.screen import Screen

# Styles
from termdom.style import Color, Style

# Terminal interface and implementations
from termdom.terminal import ProcessTerminal, Terminal, terminal_session

# Utilities
from termdom.utils import truncate_to_width, visible_width, wrap_text

# Views
from termdom.views import (
    Alignment,
    Block,
    Empty,
    MutView,
    Paragraph,
    SizedView,
    Span,
    Stack,
    View,
    prefers_size,
)

__all__ = [
    # Event loop
    "build_demo_screen",
    "run",
    "run_blocking",
    # View cells
    "ViewCell",
    "ViewCellRef",
    "ViewTypeMismatch",
    # Clipboard
    "Clipboard",
    "ClipboardError",
    "MemoryClipboard",
    "SystemClipboard",
    # Configuration
    "Config",
    # Text editing
    "Caret",
    "Cursor",
    "Selection",
    "TextContent",
    # Input decoding
    "InputDecoder",
    # Errors
    "TermdomError",
    # Rendering
    "Cell",
    "Frame",
    # Widgets
    "InputField",
    # Keybindings
    "DEFAULT_KEYBINDINGS",
    "Action",
    "KeybindingsConfig",
    "KeybindingsManager",
    "get_keybindings",
    "set_keybindings",
    # Keys
    "Event",
    "Key",
    "KeyEvent",
    "KeyId",
    "PasteEvent",
    "ResizeEvent",
    "parse_key_event",
    # Layout
    "Constraint",
    "Direction",
    "Fill",
    "LayoutError",
    "Length",
    "Percentage",
    "Ratio",
    "Rect",
    "Size",
    "equal_constraints",
    "split",
    # Navigation
    "BoundaryError",
    "codepoint_len",
    "is_boundary",
    "next_boundary",
    "prev_boundary",
    # Registry
    "ViewRegistry",
    # Screen
    "Screen",
    # Styles
    "Color",
    "Style",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    "terminal_session",
    # Utilities
    "truncate_to_width",
    "visible_width",
    "wrap_text",
    # Views
    "Alignment",
    "Block",
    "Empty",
    "MutView",
    "Paragraph",
    "SizedView",
    "Span",
    "Stack",
    "View",
    "prefers_size",
]
