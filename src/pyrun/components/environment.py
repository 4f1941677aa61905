from collections.abc import Mapping, Sequence
from types import ModuleType

from ..models import ARTIFACT_MODULE_NAME, Reference
from .protocols import EnvironmentProtocol

_ignored_modules = frozenset(("__main__", "__mp_main__", ARTIFACT_MODULE_NAME))


def _location(module: ModuleType) -> str:
    location = getattr(module, "__file__", None)
    if location:
        return location
    spec = getattr(module, "__spec__", None)
    if spec is not None and spec.origin is not None:
        return spec.origin
    return module.__name__


class ProcessEnvironment(EnvironmentProtocol):
    """Modules already loaded in the host process.

    Every call takes a fresh snapshot. The modules of `excluded_package` (the tool \
    itself) are left out.
    """

    def __init__(
        self,
        excluded_package: str,
        modules: Mapping[str, ModuleType | None] | None = None,
    ) -> None:
        self._excluded_package = excluded_package
        self._modules = modules

    def loaded_libraries(self) -> Sequence[Reference]:
        from sys import modules as sys_modules

        modules = sys_modules if self._modules is None else self._modules
        return tuple(
            Reference(name=name, location=_location(module))
            for name, module in list(modules.items())
            if isinstance(module, ModuleType) and not self._is_excluded(name)
        )

    def _is_excluded(self, name: str) -> bool:
        return (
            name in _ignored_modules
            or name == self._excluded_package
            or name.startswith(f"{self._excluded_package}.")
        )


class StaticEnvironment(EnvironmentProtocol):
    """Fixed set of libraries, handy when the loaded modules must not leak in."""

    def __init__(self, libraries: Sequence[Reference] = ()) -> None:
        self._libraries = tuple(libraries)

    def loaded_libraries(self) -> Sequence[Reference]:
        return self._libraries
