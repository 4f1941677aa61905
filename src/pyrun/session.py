"""Compile session: the configuration of one run and the function compiling it.

A [`CompileSession`][pyrun.session.CompileSession] is immutable. Every update \
returns a new session, so that processing the command line is a fold over the \
switches rather than a series of mutations. A session is still meant to be used for \
a single script.
"""

from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ConfigurationError, ReferenceNotFoundError
from .models import (
    DEFAULT_ENTRY_POINT,
    CompileOptions,
    CompileResult,
    EntryPoint,
    NotFound,
    Reference,
    Resolved,
    ResolvedWithWarning,
)

if TYPE_CHECKING:
    from .components.protocols import (
        CompilerProtocol,
        EnvironmentProtocol,
        ResolverProtocol,
    )
    from .configuring.settings import GlobalSettings


class CompileSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    script: str = ""
    """Full source of the script."""

    script_name: str = "<script>"
    """Name used for the script in diagnostics and tracebacks."""

    entry_class: str = Field(default=DEFAULT_ENTRY_POINT.class_name, min_length=1)
    entry_method: str = Field(default=DEFAULT_ENTRY_POINT.method_name, min_length=1)
    references: tuple[Reference, ...] = ()
    warning_level: int = 4
    warnings_as_errors: bool = True
    warn_on_partial_match: bool = True

    @classmethod
    def from_settings(cls, settings: "GlobalSettings") -> Self:
        entry_point = EntryPoint.parse(settings.entry_point)
        return cls(
            entry_class=entry_point.class_name,
            entry_method=entry_point.method_name,
            warning_level=settings.warning_level,
            warnings_as_errors=settings.warnings_as_errors,
            warn_on_partial_match=settings.warn_on_partial_match,
        )

    @property
    def entry_point(self) -> EntryPoint:
        return EntryPoint(self.entry_class, self.entry_method)

    def with_script(self, script: str, script_name: str | None = None) -> Self:
        return self.model_copy(
            update={
                "script": script,
                "script_name": script_name or self.script_name,
            }
        )

    def with_entry_point(self, entry_point: EntryPoint) -> Self:
        return self.model_copy(
            update={
                "entry_class": entry_point.class_name,
                "entry_method": entry_point.method_name,
            }
        )

    def with_reference(
        self,
        name: str,
        resolver: "ResolverProtocol",
        *,
        must_fully_match: bool = False,
    ) -> tuple[Self, Resolved | ResolvedWithWarning]:
        """Resolve `name` and append the resulting reference.

        Exact resolution is tried first. Unless `must_fully_match` is set, a fuzzy \
        resolution follows: its result is still appended but comes back as \
        [`ResolvedWithWarning`][pyrun.models.ResolvedWithWarning], for the caller to \
        decide whether to warn about it or to reject it.

        Args:
            name: Reference name, e.g. `json` or `yaml==6.0.1`.
            resolver: Resolver to use.
            must_fully_match: Whether to forbid partial matches.

        Raises:
            ConfigurationError: Raised if the name is empty.
            ReferenceNotFoundError: Raised if the reference cannot be resolved.

        Returns:
            The new session and the resolution outcome.
        """
        if not name or not name.strip():
            msg = "missing reference name"
            raise ConfigurationError(msg)
        result = resolver.resolve(name, must_fully_match=must_fully_match)
        match result:
            case NotFound(name=missing):
                raise ReferenceNotFoundError(missing)
            case Resolved(reference=reference) | ResolvedWithWarning(
                reference=reference
            ):
                session = self.model_copy(
                    update={"references": (*self.references, reference)}
                )
                return session, result

    def with_local_references(self, environment: "EnvironmentProtocol") -> Self:
        """Append every library of the environment, without any resolution."""
        return self.model_copy(
            update={
                "references": (
                    *self.references,
                    *environment.loaded_libraries(),
                )
            }
        )

    def compile_options(self) -> CompileOptions:
        return CompileOptions(
            main_class=str(self.entry_point),
            warning_level=self.warning_level,
            treat_warnings_as_errors=self.warnings_as_errors,
            references=self.references,
            filename=self.script_name,
            generate_executable=False,
            in_memory=True,
            include_debug_info=False,
        )


def compile_session(
    session: CompileSession, compiler: "CompilerProtocol"
) -> CompileResult:
    """Compile the script of `session`.

    The verdict is left to the caller: the result holds every diagnostic, warnings \
    included, and [`has_errors`][pyrun.models.CompileResult.has_errors] tells whether \
    the compilation must be considered failed.

    Args:
        session: Session to compile.
        compiler: Compiler to use.

    Raises:
        ConfigurationError: Raised if the script is empty or blank. The compiler is \
            not called in that case.

    Returns:
        The compiler result.
    """
    if not session.script.strip():
        msg = "script is empty"
        raise ConfigurationError(msg)
    return compiler.compile(session.script, session.compile_options())
