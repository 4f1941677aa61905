"""Locate the entry point of a compiled script and call it."""

from collections.abc import Sequence
from enum import Enum
from logging import getLogger

from ..exceptions import (
    InstantiationError,
    MissingEntryMethodError,
    MissingEntryTypeError,
    ScriptExecutionError,
)
from ..models import CompiledArtifact, EntryMethod, EntryPoint
from .protocols import DispatcherProtocol

_logger = getLogger(__name__)


def _is_plain_class(cls: type) -> bool:
    # Enums and protocols cannot be instantiated like regular classes
    return not issubclass(cls, Enum) and not getattr(cls, "_is_protocol", False)


class Dispatcher(DispatcherProtocol):
    """Find a `Class.Method` entry point by name and call it with the script args.

    Nothing is known about the entry point before the script is compiled: the class \
    is looked up in the types defined by the artifact, the method in the namespace \
    of the class, and the calling convention (static or instance) is decided from \
    the way the method is declared.
    """

    def locate_entry_type(self, artifact: CompiledArtifact, class_name: str) -> type:
        """Find the entry class among the classes defined by the script.

        Args:
            artifact: Compiled script.
            class_name: Simple name of the class, or its qualified name for nested \
                classes (`Outer.Inner`).

        Raises:
            MissingEntryTypeError: Raised if no plain class has this name.

        Returns:
            The first matching class, in definition order.
        """
        for cls in artifact.types():
            if class_name in (cls.__name__, cls.__qualname__) and _is_plain_class(cls):
                return cls
        raise MissingEntryTypeError(artifact.name, class_name)

    def locate_entry_method(self, cls: type, method_name: str) -> EntryMethod:
        """Find a method declared by `cls` itself, whatever its visibility.

        Inherited methods are not considered.

        Args:
            cls: Entry class.
            method_name: Name of the method.

        Raises:
            MissingEntryMethodError: Raised if `cls` doesn't declare a method with \
                that name.

        Returns:
            The method and its calling convention.
        """
        member = vars(cls).get(method_name)
        if isinstance(member, staticmethod | classmethod):
            return EntryMethod(method_name, member, is_static=True)
        if callable(member) and hasattr(member, "__get__"):
            return EntryMethod(method_name, member, is_static=False)
        raise MissingEntryMethodError(cls.__qualname__, method_name)

    def invoke(self, cls: type, method: EntryMethod, args: Sequence[str]) -> None:
        """Call `method` with a single argument: the list of script arguments.

        Instance methods are called on a fresh instance built without arguments.

        Raises:
            InstantiationError: Raised if the instance cannot be built.
            ScriptExecutionError: Raised if the call fails, whatever the reason.
        """
        instance = None
        if not method.is_static:
            try:
                instance = cls()
            except Exception as e:
                raise InstantiationError(cls.__qualname__) from e
        target = method.descriptor.__get__(instance, cls)
        _logger.debug("Invoking %s.%s", cls.__qualname__, method.name)
        try:
            target(list(args))
        except Exception as e:
            raise ScriptExecutionError(e) from e

    def dispatch(
        self, artifact: CompiledArtifact, entry_point: EntryPoint, args: Sequence[str]
    ) -> None:
        try:
            artifact.load()
        except Exception as e:
            raise ScriptExecutionError(e) from e
        cls = self.locate_entry_type(artifact, entry_point.class_name)
        method = self.locate_entry_method(cls, entry_point.method_name)
        self.invoke(cls, method, args)
