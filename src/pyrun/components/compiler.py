"""In-memory compiler backed by the builtin `compile`."""

import sys
from logging import getLogger
from types import CodeType, ModuleType

from ..models import (
    ARTIFACT_MODULE_NAME,
    CompiledArtifact,
    CompileOptions,
    CompileResult,
    Diagnostic,
)
from .protocols import CompilerProtocol

_logger = getLogger(__name__)

_warning_levels: dict[type[Warning], int] = {
    SyntaxWarning: 1,
    FutureWarning: 2,
    DeprecationWarning: 3,
    PendingDeprecationWarning: 3,
}
_max_warning_level = 4


def warning_level(category: type[Warning]) -> int:
    """Minimum warning level at which warnings of `category` are reported."""
    for cls in category.__mro__:
        if cls in _warning_levels:
            return _warning_levels[cls]
    return _max_warning_level


class InMemoryCompiler(CompilerProtocol):
    """Compile a script into a module that never touches the disk.

    Compilation is done in two steps. The source is first compiled to a code \
    object, recording every warning emitted on the way. Then each reference is \
    linked: imported, or taken from the already loaded modules, and bound under its \
    top-level name in the namespace of the future module.
    """

    def __init__(self, artifact_name: str = ARTIFACT_MODULE_NAME) -> None:
        self._artifact_name = artifact_name

    def compile(self, source: str, options: CompileOptions) -> CompileResult:
        code, diagnostics = self._compile_code(source, options)
        if code is None:
            return CompileResult(tuple(diagnostics))
        linked, link_diagnostics = self._link(options)
        diagnostics.extend(link_diagnostics)
        if any(diagnostic.is_error for diagnostic in diagnostics):
            return CompileResult(tuple(diagnostics))
        _logger.debug(
            "Compiled %s with %d linked module(s)", options.filename, len(linked)
        )
        return CompileResult(
            tuple(diagnostics),
            CompiledArtifact(code=code, name=self._artifact_name, linked=linked),
        )

    def _compile_code(
        self, source: str, options: CompileOptions
    ) -> tuple[CodeType | None, list[Diagnostic]]:
        from warnings import catch_warnings, simplefilter

        code: CodeType | None = None
        errors: list[Diagnostic] = []
        with catch_warnings(record=True) as caught:
            simplefilter("always")
            try:
                code = compile(
                    source,
                    options.filename,
                    "exec",
                    dont_inherit=True,
                    optimize=0 if options.include_debug_info else -1,
                )
            except SyntaxError as e:
                errors.append(Diagnostic.from_syntax_error(e, options.filename))
            except ValueError as e:
                # Source containing null bytes
                errors.append(
                    Diagnostic(
                        message=str(e),
                        is_error=True,
                        category=type(e).__name__,
                        filename=options.filename,
                    )
                )
        diagnostics = [
            Diagnostic(
                message=str(warning.message),
                is_error=options.treat_warnings_as_errors,
                category=warning.category.__name__,
                filename=warning.filename or options.filename,
                line=warning.lineno,
            )
            for warning in caught
            if warning_level(warning.category) <= options.warning_level
        ]
        diagnostics.extend(errors)
        return code, diagnostics

    def _link(
        self, options: CompileOptions
    ) -> tuple[dict[str, ModuleType], list[Diagnostic]]:
        from importlib import import_module

        linked: dict[str, ModuleType] = {}
        diagnostics: list[Diagnostic] = []
        for reference in options.references:
            try:
                module = sys.modules.get(reference.name) or import_module(
                    reference.name
                )
            except Exception as e:  # noqa: BLE001
                diagnostics.append(
                    Diagnostic(
                        message=f"could not link reference '{reference.name}': {e}",
                        is_error=True,
                        category="LinkError",
                        filename=options.filename,
                    )
                )
                continue
            top_level = reference.name.partition(".")[0]
            linked[top_level] = sys.modules.get(top_level) or module
        return linked, diagnostics
