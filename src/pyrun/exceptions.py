from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Diagnostic


class PyrunError(Exception):
    pass


class ConfigurationError(PyrunError):
    pass


class EntryPointSyntaxError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Entry point must take the form 'Class.Method'.")


class ScriptReadError(ConfigurationError):
    pass


class ReferenceResolutionError(PyrunError):
    pass


class ReferenceNotFoundError(ReferenceResolutionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"could not find reference '{name}'")
        self.name = name


class CompileError(PyrunError):
    def __init__(self, diagnostics: Sequence["Diagnostic"]) -> None:
        super().__init__("Compilation failed with errors.")
        self.diagnostics = tuple(diagnostics)


class DispatchError(PyrunError):
    pass


class MissingEntryTypeError(DispatchError):
    def __init__(self, artifact_name: str, class_name: str) -> None:
        super().__init__(f"Couldn't find class {class_name} in {artifact_name}")
        self.class_name = class_name


class MissingEntryMethodError(DispatchError):
    def __init__(self, class_name: str, method_name: str) -> None:
        super().__init__(f"Couldn't get entry point {class_name}.{method_name}")
        self.class_name = class_name
        self.method_name = method_name


class InstantiationError(DispatchError):
    def __init__(self, class_name: str) -> None:
        super().__init__(f"Couldn't instantiate class {class_name}")
        self.class_name = class_name


class ScriptExecutionError(PyrunError):
    """Failure raised by the script itself rather than by pyrun.

    The message is always prefixed so that it cannot be mistaken for a pyrun error.
    """

    prefix = "SCRIPT EXCEPTION: "

    def __init__(self, inner: BaseException) -> None:
        super().__init__(f"{self.prefix}{str(inner) or type(inner).__name__}")
        self.inner = inner
