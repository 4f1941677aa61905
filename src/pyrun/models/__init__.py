"""Modules containing model classes for different parts of pyrun.

- [`compilation`][pyrun.models.compilation] contains the compiler contract: options, \
    diagnostics, results and the in-memory artifact
- [`references`][pyrun.models.references] contains resolved references and the \
    outcomes of a resolution
- [`scalars`][pyrun.models.scalars] contains small value types such as entry points
"""

from .compilation import (
    ARTIFACT_MODULE_NAME,
    CompiledArtifact,
    CompileOptions,
    CompileResult,
    Diagnostic,
)
from .references import (
    NotFound,
    Reference,
    Resolved,
    ResolvedWithWarning,
    ResolveResult,
)
from .scalars import DEFAULT_ENTRY_POINT, EntryMethod, EntryPoint

__all__ = [
    "ARTIFACT_MODULE_NAME",
    "DEFAULT_ENTRY_POINT",
    "CompileOptions",
    "CompileResult",
    "CompiledArtifact",
    "Diagnostic",
    "EntryMethod",
    "EntryPoint",
    "NotFound",
    "Reference",
    "ResolveResult",
    "Resolved",
    "ResolvedWithWarning",
]
