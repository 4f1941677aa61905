from functools import reduce
from pathlib import Path
from typing import Annotated, Any, Self

from appdirs import user_config_dir as appdirs_user_config_dir
from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from yaml import YAMLError

from .. import app_name
from ..exceptions import ConfigurationError
from ..models import DEFAULT_ENTRY_POINT, EntryPoint
from ..utils import dirs_hierarchy, load_all_yamls

settings_filename = f"{app_name}.yml"


def _check_entry_point(value: str) -> str:
    EntryPoint.parse(value)
    return value.strip()


def _merge(a: dict[str, Any], b: Any) -> dict[str, Any]:
    if b is None:
        return a
    if not isinstance(b, dict):
        msg = f"{settings_filename} files must contain a mapping"
        raise ConfigurationError(msg)
    return {**a, **b}


def user_config_dir() -> Path:
    return Path(appdirs_user_config_dir(app_name)).resolve()


class GlobalSettings(BaseModel):
    """Defaults applied to every session before the command line switches."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    warning_level: int = 4
    warnings_as_errors: bool = True
    warn_on_partial_match: bool = True
    entry_point: Annotated[str, AfterValidator(_check_entry_point)] = str(
        DEFAULT_ENTRY_POINT
    )
    references: tuple[str, ...] = ()
    """Reference names added before the `//ref` switches."""

    local_references: bool = True
    """Whether to reference every module already loaded by pyrun."""

    @classmethod
    def from_yaml(cls, path: Path) -> Self:
        """Load and merge the settings files that apply to `path`.

        Files are read from the user configuration directory, then from every \
        directory between the filesystem root and `path`. Keys from the most specific \
        file win.

        Args:
            path: Directory pyrun is run from.

        Raises:
            ConfigurationError: Raised if a settings file is invalid.

        Returns:
            The merged settings.
        """
        try:
            content: dict[str, Any] = reduce(
                _merge,
                load_all_yamls(
                    d
                    for p in dirs_hierarchy(user_config_dir(), path)
                    if (d := p / settings_filename).is_file()
                ),
                {},
            )
            return cls.model_validate(content)
        except (ValidationError, YAMLError) as e:
            msg = f"invalid settings: {e}"
            raise ConfigurationError(msg) from e
