"""Small value types used to address the entry point of a script."""

from dataclasses import dataclass
from typing import Any, Self

from ..exceptions import EntryPointSyntaxError


@dataclass(frozen=True)
class EntryPoint:
    """Coordinates of the callable to run once the script is compiled."""

    class_name: str
    method_name: str

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse a `Class.Method` string.

        The split happens on the last dot, so `A.B.C` addresses the method `C` of the \
        class `A.B`.

        Args:
            text: Entry point coordinates, surrounding whitespace is ignored.

        Raises:
            EntryPointSyntaxError: Raised if there is no dot, if the dot is the first \
                or last character or if one of the two parts is blank.

        Returns:
            The parsed entry point.
        """
        text = text.strip()
        dot = text.rfind(".")
        if dot <= 0 or dot == len(text) - 1:
            raise EntryPointSyntaxError
        class_name = text[:dot].strip()
        method_name = text[dot + 1 :].strip()
        if not class_name or not method_name:
            raise EntryPointSyntaxError
        return cls(class_name, method_name)

    def __str__(self) -> str:
        return f"{self.class_name}.{self.method_name}"


DEFAULT_ENTRY_POINT = EntryPoint("Program", "Main")


@dataclass(frozen=True)
class EntryMethod:
    """Entry method found in the namespace of the entry class.

    `descriptor` is the raw class attribute: a function for instance methods, a \
    staticmethod or classmethod object otherwise.
    """

    name: str
    descriptor: Any
    is_static: bool
