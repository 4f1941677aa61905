from collections.abc import Sequence
from logging import INFO, basicConfig

from cyclopts import App
from rich.logging import RichHandler

# Every token belongs either to pyrun's own // switches or to the script
app = App(help_flags=[], version_flags=[])


def main(tokens: Sequence[str] | None = None) -> None:
    basicConfig(
        level=INFO,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(rich_tracebacks=True, tracebacks_show_locals=False)],
    )
    from . import run  # noqa: F401

    app(tokens)
