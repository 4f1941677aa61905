"""Resolved references and the possible outcomes of resolving one."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class Reference(BaseModel):
    """Module the script is linked against."""

    model_config = ConfigDict(frozen=True)

    name: str
    """Importable module name, e.g. `yaml` or `xml.etree`."""

    location: str
    """Origin of the module: a file path, `built-in`, `frozen`, etc."""

    version: str | None = None
    """Version of the distribution shipping the module, if any."""

    @property
    def identity(self) -> str:
        if self.version is None:
            return self.name
        return f"{self.name}=={self.version}"


@dataclass(frozen=True)
class Resolved:
    reference: Reference


@dataclass(frozen=True)
class ResolvedWithWarning:
    """The requested name only partially matched the resolved reference."""

    reference: Reference
    partial_name: str
    resolved_name: str


@dataclass(frozen=True)
class NotFound:
    name: str


type ResolveResult = Resolved | ResolvedWithWarning | NotFound
