from collections.abc import Sequence
from logging import getLogger
from typing import TYPE_CHECKING

from .exceptions import CompileError
from .session import CompileSession, compile_session
from .switches import USAGE, add_reference, is_help_request, parse_invocation
from .utils import print_plain, read_script

if TYPE_CHECKING:
    from .components.protocols import FactoryProtocol
    from .configuring.settings import GlobalSettings

_logger = getLogger(__name__)


def run(
    tokens: Sequence[str],
    settings: "GlobalSettings",
    factory: "FactoryProtocol | None" = None,
) -> None:
    """Compile the script named on the command line and run its entry point.

    Args:
        tokens: Command line tokens: switches, filename, then script arguments.
        settings: Defaults for the session, overridden by the switches.
        factory: Components to use. Built from the settings if not provided.

    Raises:
        CompileError: Raised if the compiler reported at least one error. Every \
            diagnostic is printed beforehand.
    """
    if is_help_request(tokens):
        print_plain(USAGE)
        return
    if factory is None:
        from .components.factory import SettingsFactory

        factory = SettingsFactory(settings)
    resolver = factory.resolver()
    session = CompileSession.from_settings(settings)
    for name in settings.references:
        session = add_reference(session, name, resolver)
    invocation = parse_invocation(tokens, session, resolver)
    if invocation is None:
        print_plain(USAGE)
        return
    session = invocation.session.with_local_references(factory.environment())
    for reference in session.references:
        _logger.debug("Reference %s: %s", reference.name, reference.location)
    session = session.with_script(
        read_script(invocation.filename), str(invocation.filename)
    )
    result = compile_session(session, factory.compiler())
    print_plain(*(str(diagnostic) for diagnostic in result.diagnostics))
    if result.has_errors or result.artifact is None:
        raise CompileError(result.diagnostics)
    factory.dispatcher().dispatch(
        result.artifact, session.entry_point, invocation.script_args
    )
