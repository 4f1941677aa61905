"""Provide general utility functions that would not fit in other modules."""

from collections.abc import Iterable, Iterator
from contextlib import suppress
from pathlib import Path
from typing import Any

from .exceptions import ScriptReadError


def read_script(path: Path) -> str:
    """Read a Python source file entirely.

    The encoding is detected like the interpreter does it: from a BOM or a coding \
    cookie, falling back to UTF-8. The file is closed before returning, whatever the \
    outcome.

    Args:
        path: Path of the script.

    Raises:
        ScriptReadError: Raised if the file cannot be opened or decoded.

    Returns:
        The content of the script.
    """
    from tokenize import open as tokenize_open

    try:
        with tokenize_open(path) as fh:
            return fh.read()
    except (OSError, SyntaxError, UnicodeDecodeError) as e:
        msg = f"Error reading script: {e}"
        raise ScriptReadError(msg) from e


def print_plain(*lines: str) -> None:
    """Print lines on the standard output, without any rich markup interpretation."""
    from rich.console import Console

    console = Console(markup=False, highlight=False, emoji=False, soft_wrap=True)
    for line in lines:
        console.print(line)


def dirs_hierarchy(user_config_dir: Path, current_dir: Path) -> Iterator[Path]:
    """Yield the directories to look for settings in, from the least to most specific.

    Args:
        user_config_dir: Per-user configuration directory.
        current_dir: Directory pyrun is run from.

    Yields:
        The user configuration directory, then every directory from the root of the \
        filesystem down to `current_dir`.
    """
    yield user_config_dir
    current_dir = current_dir.resolve()
    yield from reversed((current_dir, *current_dir.parents))


def load_yaml(path: Path) -> Any:
    from yaml import safe_load

    return safe_load(path.read_text(encoding="utf8"))


def load_all_yamls(paths: Iterable[Path]) -> Iterator[Any]:
    for path in paths:
        with suppress(FileNotFoundError):
            yield load_yaml(path)
