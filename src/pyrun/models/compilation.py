"""Model classes exchanged with the compiler."""

import sys
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import CodeType, ModuleType
from typing import Self

from .references import Reference

ARTIFACT_MODULE_NAME = "__pyrun_script__"


@dataclass(frozen=True)
class Diagnostic:
    """Issue reported by the compiler about the compiled source."""

    message: str
    is_error: bool
    category: str
    filename: str
    line: int | None = None
    column: int | None = None

    @classmethod
    def from_syntax_error(cls, error: SyntaxError, filename: str) -> Self:
        return cls(
            message=error.msg,
            is_error=True,
            category=type(error).__name__,
            filename=error.filename or filename,
            line=error.lineno,
            column=error.offset,
        )

    def __str__(self) -> str:
        kind = "error" if self.is_error else "warning"
        position = ""
        if self.line is not None:
            position = f"({self.line},{self.column or 0})"
        return f"{self.filename}{position}: {kind} {self.category}: {self.message}"


@dataclass(frozen=True)
class CompileOptions:
    main_class: str
    warning_level: int
    treat_warnings_as_errors: bool
    references: tuple[Reference, ...] = ()
    filename: str = "<script>"
    generate_executable: bool = False
    in_memory: bool = True
    include_debug_info: bool = False


@dataclass(frozen=True)
class CompileResult:
    diagnostics: tuple[Diagnostic, ...] = ()
    artifact: "CompiledArtifact | None" = None

    @property
    def count(self) -> int:
        return len(self.diagnostics)

    @property
    def has_errors(self) -> bool:
        return any(diagnostic.is_error for diagnostic in self.diagnostics)


@dataclass
class CompiledArtifact:
    """In-memory module produced by a successful compilation.

    The module body only runs when the artifact is loaded, the first time its types \
    are requested. Linked modules are bound in the module namespace before the body \
    runs, so the script can use them without importing them.
    """

    code: CodeType
    name: str = ARTIFACT_MODULE_NAME
    linked: Mapping[str, ModuleType] = field(default_factory=dict)
    _module: ModuleType | None = field(default=None, init=False, repr=False)

    def load(self) -> ModuleType:
        if self._module is not None:
            return self._module
        module = ModuleType(self.name)
        module.__dict__.update(self.linked)
        module.__file__ = self.code.co_filename
        # Registered so that dataclasses, pickle and friends can find the module back.
        sys.modules[self.name] = module
        try:
            exec(self.code, module.__dict__)  # noqa: S102
        except BaseException:
            sys.modules.pop(self.name, None)
            raise
        self._module = module
        return module

    def types(self) -> tuple[type, ...]:
        """List the classes defined by the script, nested ones included.

        Returns:
            Classes in definition order, each nested class right after its parent.
        """
        module = self.load()
        return tuple(_defined_classes(vars(module).values(), module.__name__, set()))


def _defined_classes(
    candidates: Iterable[object], module_name: str, seen: set[type]
) -> Iterator[type]:
    for candidate in candidates:
        if (
            isinstance(candidate, type)
            and candidate.__module__ == module_name
            and candidate not in seen
        ):
            seen.add(candidate)
            yield candidate
            yield from _defined_classes(vars(candidate).values(), module_name, seen)
