"""Console script for csscompat."""

from __future__ import annotations

import logging
from pathlib import Path
import sys

import click
from rich.console import Console

from . import __version__ as _version
from .analyzer import analyze_css_support
from .compat_data import load_knowledge_base
from .config import load_settings
from .exceptions import CsscompatError
from .render_basic import render_result
from .ui.editor import run_editor
from .util.text import join_sources


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _read_sources(paths: tuple[Path, ...]) -> str:
    if not paths:
        return sys.stdin.read()

    sources: list[str] = []
    for path in paths:
        try:
            sources.append(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise click.ClickException(f"Cannot read {path}: {exc}") from exc
    return join_sources(sources)


@click.argument(
    "paths",
    metavar="[CSS_FILE]...",
    nargs=-1,
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--data",
    "data_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Local browser-compat-data JSON file (overrides CSSCOMPAT_DATA).",
)
@click.option("--refresh", is_flag=True, help="Download a fresh copy of the compatibility data.")
@click.option("--edit", "edit_mode", is_flag=True, help="Open the interactive CSS editor.")
@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(_version, "-v", "--version")
def main(
    paths: tuple[Path, ...], data_path: Path | None, refresh: bool, edit_mode: bool
) -> None:
    """
    Find the minimum Chrome, Firefox and Safari versions that support a CSS snippet

    \b
    Example usages:
      csscompat styles.css
      cat styles.css | csscompat
      csscompat --edit
    """
    if edit_mode and paths:
        raise click.UsageError("--edit cannot be combined with CSS files.")
    if edit_mode and not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise click.UsageError("--edit needs an interactive terminal.")
    if not edit_mode and not paths and sys.stdin.isatty():
        raise click.UsageError("Pass CSS files, pipe CSS on stdin, or use --edit.")

    try:
        settings = load_settings().with_data_path(data_path)
        _configure_logging(settings.debug)
        knowledge_base = load_knowledge_base(settings, refresh=refresh)
    except CsscompatError as exc:
        raise click.ClickException(str(exc)) from exc

    if edit_mode:
        run_editor(knowledge_base)
        return

    result = analyze_css_support(_read_sources(paths), knowledge_base)
    console = Console()
    console.print(render_result(result, width=console.width))
