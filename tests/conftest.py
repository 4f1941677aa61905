from collections.abc import Callable, Iterator
from logging import NOTSET, getLogger
from pathlib import Path
from typing import Any

from pytest import fixture

from pyrun import app_name
from pyrun.components.compiler import InMemoryCompiler
from pyrun.models import CompiledArtifact, CompileOptions


@fixture
def working_dir(tmp_path: Path, monkeypatch: Any) -> Path:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    working_dir = tmp_path / "work"
    working_dir.mkdir()
    monkeypatch.chdir(working_dir)
    monkeypatch.setattr(
        "pyrun.configuring.settings.appdirs_user_config_dir",
        lambda _: str(config_dir),
    )
    return working_dir


@fixture(autouse=True)
def reset_pyrun_logger() -> Iterator[None]:
    yield
    getLogger(app_name).setLevel(NOTSET)


@fixture
def compile_artifact() -> Callable[[str], CompiledArtifact]:
    def _compile(source: str) -> CompiledArtifact:
        result = InMemoryCompiler().compile(
            source,
            CompileOptions(
                main_class="Program.Main",
                warning_level=4,
                treat_warnings_as_errors=True,
                filename="script.py",
            ),
        )
        assert result.artifact is not None, [str(d) for d in result.diagnostics]
        return result.artifact

    return _compile
