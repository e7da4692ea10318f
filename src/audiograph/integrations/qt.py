"""Text measurement with Qt font metrics.

Requires the optional ``PySide6`` package -- raises ``ImportError`` on
first use if it is not installed.

Usage::

    from audiograph import GraphView
    from audiograph.integrations.qt import QtTextMeasurer

    graph = GraphView('ctx', measurer=QtTextMeasurer())

Qt needs a ``QGuiApplication`` before fonts can be measured. The measurer
reuses the running one, or creates it on first use. Without a display
(``DISPLAY``/``WAYLAND_DISPLAY`` unset on Linux) the ``offscreen``
platform plugin is selected unless ``QT_QPA_PLATFORM`` says otherwise.
"""

import os
import sys
import threading
from typing import Any, Dict, Optional

from ..text import DEFAULT_FONT_SIZE, parse_font_families, parse_font_size


def _import_qt() -> Any:
    try:
        from PySide6 import QtGui
    except ImportError:
        raise ImportError(
            "PySide6 is required for QtTextMeasurer but is not installed. "
            "Install it with: pip install audiograph[qt]"
        ) from None
    return QtGui


def _is_headless() -> bool:
    if not sys.platform.startswith("linux"):
        return False
    return not (os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))


class QtTextMeasurer:
    """Measures text with ``QFontMetricsF``.

    Each call measures with a font built from that call's style, so a
    style never carries over into later calls. Fonts are cached per style
    string. Calls are serialized with a lock. The first call creates the
    ``QGuiApplication`` if none is running, and Qt requires that to happen
    on the main thread.

    Parameters
    ----------
    default_font_size : float
        Pixel size used when a style names none (default: 14)
    """

    def __init__(self, default_font_size: float = DEFAULT_FONT_SIZE) -> None:
        self.default_font_size = default_font_size
        self._lock = threading.Lock()
        self._qt_gui: Any = None
        self._app: Any = None
        self._fonts: Dict[Optional[str], Any] = {}

    def _ensure_context(self) -> Any:
        """Lazy-initialize the Qt application exactly once."""
        if self._qt_gui is not None:
            return self._qt_gui

        qt_gui = _import_qt()
        app = qt_gui.QGuiApplication.instance()
        if app is None:
            if _is_headless():
                os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
            app = qt_gui.QGuiApplication(["audiograph"])
        self._app = app
        self._qt_gui = qt_gui
        return qt_gui

    def _font_for(self, font_style: Optional[str]) -> Any:
        font = self._fonts.get(font_style)
        if font is None:
            font = self._qt_gui.QFont()
            families = parse_font_families(font_style)
            if families:
                font.setFamilies(families)
            size = parse_font_size(font_style, self.default_font_size)
            font.setPixelSize(max(1, round(size)))
            self._fonts[font_style] = font
        return font

    def measure_width(self, text: str, font_style: Optional[str] = None) -> float:
        with self._lock:
            qt_gui = self._ensure_context()
            metrics = qt_gui.QFontMetricsF(self._font_for(font_style))
            return metrics.horizontalAdvance(text)

    def __repr__(self) -> str:
        return f"QtTextMeasurer(default_font_size={self.default_font_size})"
