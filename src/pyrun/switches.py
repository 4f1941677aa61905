"""Processing of the `//` switches that precede the script filename.

Switch names are case-insensitive. A value, when the switch takes one, follows the \
first colon: `//Ref:json`, `//EntryPoint:Program.Main`, `//WarningLevel:3`.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from logging import DEBUG, getLogger
from pathlib import Path
from re import compile as re_compile

from . import app_name
from .components.protocols import ResolverProtocol
from .exceptions import ConfigurationError
from .models import EntryPoint, ResolvedWithWarning
from .session import CompileSession

SWITCH_PREFIX = "//"
HELP_TOKEN = "/?"
USAGE = (
    f"Usage: {app_name} [//NoWarningsAsErrors] [//WarningLevel:<val>] "
    "[//NoPartialMatchWarning] [//EntryPoint:<Class>.<Method>] [//Ref:<Reference>] "
    "[//Verbose] <filename.py> [Script arguments...]"
)

_logger = getLogger(__name__)
_integer = re_compile(r"[+-]?\d+")


@dataclass(frozen=True)
class Invocation:
    session: CompileSession
    filename: Path
    script_args: tuple[str, ...]


def is_help_request(tokens: Sequence[str]) -> bool:
    return not tokens or (len(tokens) == 1 and tokens[0] == HELP_TOKEN)


def add_reference(
    session: CompileSession, name: str, resolver: ResolverProtocol
) -> CompileSession:
    """Add a reference, warning about partial matches if the session asks for it."""
    session, result = session.with_reference(name, resolver)
    if isinstance(result, ResolvedWithWarning) and session.warn_on_partial_match:
        _logger.warning(
            "Adding reference based on partial name '%s': '%s'",
            result.partial_name,
            result.resolved_name,
        )
    return session


def apply_switch(
    token: str, session: CompileSession, resolver: ResolverProtocol
) -> CompileSession:
    name, _, value = token.partition(":")
    name = name.strip().lower()
    value = value.strip()
    match name:
        case "//ref":
            return add_reference(session, value, resolver)
        case "//entrypoint":
            return session.with_entry_point(EntryPoint.parse(value))
        case "//nopartialmatchwarning":
            return session.model_copy(update={"warn_on_partial_match": False})
        case "//nowarningsaserrors":
            return session.model_copy(update={"warnings_as_errors": False})
        case "//warninglevel":
            if _integer.fullmatch(value) is None:
                msg = "Warning level expects a valid integer."
                raise ConfigurationError(msg)
            return session.model_copy(update={"warning_level": int(value)})
        case "//verbose":
            getLogger(app_name).setLevel(DEBUG)
            return session
        case _:
            _logger.warning("Ignoring unknown switch %s", token)
            return session


def parse_invocation(
    tokens: Sequence[str], session: CompileSession, resolver: ResolverProtocol
) -> Invocation | None:
    """Apply the switches to `session` and split the remaining tokens.

    Args:
        tokens: Command line tokens, without the program name.
        session: Session to start from.
        resolver: Resolver used by `//ref` switches.

    Returns:
        The invocation, or None if the usage should be shown instead: no tokens, \
        only the help token, or no filename after the switches.
    """
    if is_help_request(tokens):
        return None
    index = 0
    while index < len(tokens) and tokens[index].startswith(SWITCH_PREFIX):
        session = apply_switch(tokens[index], session, resolver)
        index += 1
    if index == len(tokens):
        return None
    return Invocation(
        session=session,
        filename=Path(tokens[index]),
        script_args=tuple(tokens[index + 1 :]),
    )
