from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..models import (
        CompiledArtifact,
        CompileOptions,
        CompileResult,
        EntryMethod,
        EntryPoint,
        Reference,
        ResolveResult,
    )


class CompilerProtocol(Protocol):
    """Turn source text into an in-memory artifact and its diagnostics."""

    def compile(self, source: str, options: "CompileOptions") -> "CompileResult":
        """Compile `source` with the given options.

        Args:
            source: Full text of the script.
            options: Compiler configuration, including the references to link.

        Returns:
            The diagnostics, and the artifact if the compilation succeeded.
        """


class EnvironmentProtocol(Protocol):
    def loaded_libraries(self) -> Sequence["Reference"]: ...


class ResolverProtocol(Protocol):
    def resolve_exact(self, name: str) -> "Reference": ...

    def resolve_fuzzy(self, name: str) -> "Reference": ...

    def resolve(
        self, name: str, *, must_fully_match: bool = False
    ) -> "ResolveResult": ...


class DispatcherProtocol(Protocol):
    def locate_entry_type(
        self, artifact: "CompiledArtifact", class_name: str
    ) -> type: ...

    def locate_entry_method(self, cls: type, method_name: str) -> "EntryMethod": ...

    def invoke(
        self, cls: type, method: "EntryMethod", args: Sequence[str]
    ) -> None: ...

    def dispatch(
        self,
        artifact: "CompiledArtifact",
        entry_point: "EntryPoint",
        args: Sequence[str],
    ) -> None: ...


class FactoryProtocol(Protocol):
    def compiler(self) -> CompilerProtocol: ...

    def environment(self) -> EnvironmentProtocol: ...

    def resolver(self) -> ResolverProtocol: ...

    def dispatcher(self) -> DispatcherProtocol: ...
