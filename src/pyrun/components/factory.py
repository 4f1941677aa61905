from typing import TYPE_CHECKING

from .protocols import (
    CompilerProtocol,
    DispatcherProtocol,
    EnvironmentProtocol,
    FactoryProtocol,
    ResolverProtocol,
)

if TYPE_CHECKING:
    from ..configuring.settings import GlobalSettings


class SettingsFactory(FactoryProtocol):
    def __init__(self, settings: "GlobalSettings") -> None:
        self._settings = settings

    def compiler(self) -> CompilerProtocol:
        from .compiler import InMemoryCompiler

        return InMemoryCompiler()

    def environment(self) -> EnvironmentProtocol:
        from .. import app_name
        from .environment import ProcessEnvironment, StaticEnvironment

        if not self._settings.local_references:
            return StaticEnvironment()
        return ProcessEnvironment(excluded_package=app_name)

    def resolver(self) -> ResolverProtocol:
        from .resolver import ReferenceResolver

        return ReferenceResolver()

    def dispatcher(self) -> DispatcherProtocol:
        from .dispatcher import Dispatcher

        return Dispatcher()
