from pathlib import Path

from pytest import CaptureFixture, raises

from pyrun.components.compiler import InMemoryCompiler
from pyrun.components.dispatcher import Dispatcher
from pyrun.components.environment import StaticEnvironment
from pyrun.components.protocols import (
    CompilerProtocol,
    DispatcherProtocol,
    EnvironmentProtocol,
    ResolverProtocol,
)
from pyrun.components.resolver import ReferenceResolver
from pyrun.configuring.settings import GlobalSettings
from pyrun.exceptions import CompileError, ScriptReadError
from pyrun.models import CompileOptions, CompileResult, Reference
from pyrun.running import run

_script = """
class Program:
    @staticmethod
    def Main(args):
        for i, arg in enumerate(args):
            print(f"{i}: {arg}")
"""


class StubFactory:
    def __init__(self, libraries: tuple[Reference, ...] = ()) -> None:
        self.libraries = libraries
        self.options: list[CompileOptions] = []

    def compiler(self) -> CompilerProtocol:
        factory = self

        class RecordingCompiler(InMemoryCompiler):
            def compile(self, source: str, options: CompileOptions) -> CompileResult:
                factory.options.append(options)
                return super().compile(source, options)

        return RecordingCompiler()

    def environment(self) -> EnvironmentProtocol:
        return StaticEnvironment(self.libraries)

    def resolver(self) -> ResolverProtocol:
        return ReferenceResolver()

    def dispatcher(self) -> DispatcherProtocol:
        return Dispatcher()


def _write_script(directory: Path, content: str = _script) -> Path:
    path = directory / "script.py"
    path.write_text(content, encoding="utf8")
    return path


def test_run(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    script = _write_script(tmp_path)

    run([str(script), "a", "--b", "c d"], GlobalSettings(), StubFactory())

    assert capsys.readouterr().out == "0: a\n1: --b\n2: c d\n"


def test_run_help(capsys: CaptureFixture[str]) -> None:
    factory = StubFactory()

    run([], GlobalSettings(), factory)
    run(["/?"], GlobalSettings(), factory)
    run(["//warninglevel:3"], GlobalSettings(), factory)

    assert capsys.readouterr().out.count("Usage: pyrun") == 3
    assert factory.options == []


def test_run_references_order(tmp_path: Path) -> None:
    script = _write_script(tmp_path)
    local = Reference(name="sys", location="built-in")
    factory = StubFactory(libraries=(local,))

    run(
        ["//ref:xml", str(script)],
        GlobalSettings(references=("json",)),
        factory,
    )

    [options] = factory.options
    assert [reference.name for reference in options.references] == [
        "json",
        "xml",
        "sys",
    ]
    assert options.filename == str(script)


def test_run_settings(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    script = _write_script(
        tmp_path,
        "class App:\n    def run(self, args):\n        print(args)\n",
    )
    factory = StubFactory()

    run(
        ["//warninglevel:2", str(script), "x"],
        GlobalSettings(entry_point="App.run", warnings_as_errors=False),
        factory,
    )

    [options] = factory.options
    assert options.main_class == "App.run"
    assert options.warning_level == 2
    assert not options.treat_warnings_as_errors
    assert capsys.readouterr().out == "['x']\n"


def test_run_compile_error(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    script = _write_script(tmp_path, "class Program:\n    def Main(args)\n")

    with raises(CompileError, match="Compilation failed with errors.") as excinfo:
        run([str(script)], GlobalSettings(), StubFactory())

    assert len(excinfo.value.diagnostics) == 1
    assert "error SyntaxError" in capsys.readouterr().out


def test_run_warnings_are_printed(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    script = _write_script(
        tmp_path,
        "class Program:\n"
        "    @staticmethod\n"
        "    def Main(args):\n"
        "        print(len(args) is 0)\n",
    )

    run(["//nowarningsaserrors", str(script)], GlobalSettings(), StubFactory())

    out = capsys.readouterr().out
    assert "warning SyntaxWarning" in out
    assert out.endswith("True\n")


def test_run_missing_file(tmp_path: Path) -> None:
    with raises(ScriptReadError, match="Error reading script"):
        run([str(tmp_path / "missing.py")], GlobalSettings(), StubFactory())


def test_run_coding_cookie(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    script = tmp_path / "latin.py"
    script.write_bytes(
        b"# -*- coding: latin-1 -*-\n"
        b"class Program:\n"
        b"    @staticmethod\n"
        b"    def Main(args):\n"
        b"        print('caf\xe9')\n"
    )

    run([str(script)], GlobalSettings(), StubFactory())

    assert capsys.readouterr().out == "café\n"
