"""Textual app for editing CSS with live support analysis."""

from __future__ import annotations

import logging
from typing import ClassVar

from rich.console import RenderableType
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.timer import Timer
from textual.widgets import Static, TextArea

from ..analyzer import analyze_css_support
from ..compat_data import KnowledgeBase
from ..constants import EDITOR_PLACEHOLDER
from ..render_basic import render_failure, render_result

LOGGER = logging.getLogger(__name__)
_DEBOUNCE_SECONDS = 0.25


def analysis_frame(code: str, knowledge_base: KnowledgeBase) -> RenderableType:
    """Analyze editor contents and return the renderable for the result pane."""
    try:
        return render_result(analyze_css_support(code, knowledge_base))
    except Exception as exc:
        LOGGER.exception("CSS analysis failed")
        return render_failure(str(exc) or exc.__class__.__name__)


class _CssEditorApp(App[None]):
    CSS = """
    Screen {
        layout: horizontal;
    }

    #editor {
        width: 1fr;
        height: 1fr;
    }

    #result-pane {
        width: 1fr;
        height: 1fr;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("ctrl+l", "clear_editor", "Clear", priority=True),
        Binding("escape", "quit_app", "Quit", priority=True),
        Binding("ctrl+q", "quit_app", show=False, priority=True),
    ]

    def __init__(
        self, knowledge_base: KnowledgeBase, initial_text: str = EDITOR_PLACEHOLDER
    ) -> None:
        super().__init__()
        self._knowledge_base = knowledge_base
        self._initial_text = initial_text
        self._pending: Timer | None = None

    def compose(self) -> ComposeResult:
        yield TextArea(self._initial_text, id="editor")
        with VerticalScroll(id="result-pane"):
            yield Static(id="result")

    def on_mount(self) -> None:
        self.query_one("#editor", TextArea).focus()
        self._refresh_result()

    def on_text_area_changed(self, _event: TextArea.Changed) -> None:
        self._schedule_analysis()

    def _schedule_analysis(self) -> None:
        if self._pending is not None:
            self._pending.stop()
        self._pending = self.set_timer(_DEBOUNCE_SECONDS, self._refresh_result)

    def _refresh_result(self) -> None:
        self._pending = None
        code = self.query_one("#editor", TextArea).text
        self.query_one("#result", Static).update(analysis_frame(code, self._knowledge_base))

    def action_clear_editor(self) -> None:
        editor = self.query_one("#editor", TextArea)
        editor.load_text("")
        editor.focus()
        self._schedule_analysis()

    def action_quit_app(self) -> None:
        self.exit()


def run_editor(knowledge_base: KnowledgeBase, initial_text: str = EDITOR_PLACEHOLDER) -> None:
    """Run the Textual editor until the user quits."""
    _CssEditorApp(knowledge_base, initial_text).run()
