from pathlib import Path

from pytest import CaptureFixture

from pyrun.cli import main

_hello = """
class Program:
    @staticmethod
    def Main(args):
        for i, arg in enumerate(args):
            print(f"{i}: {arg}")
"""


def run_pyrun(*args: str) -> int:
    try:
        main(list(args))
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0
    return 0


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf8")
    return path


def test_run(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    _write(working_dir / "hello.py", _hello)

    assert run_pyrun("hello.py", "a", "b") == 0
    assert capsys.readouterr().out.endswith("0: a\n1: b\n")


def test_run_with_switches(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    _write(
        working_dir / "app.py",
        "class App:\n    def start(self, args):\n        print(json.dumps(args))\n",
    )

    code = run_pyrun(
        "//EntryPoint:App.start", "//ref:json", "//warninglevel:4", "app.py", "x"
    )

    assert code == 0
    assert capsys.readouterr().out.endswith('["x"]\n')


def test_help(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    assert run_pyrun() == 0
    assert run_pyrun("/?") == 0
    assert run_pyrun("//nowarningsaserrors") == 0
    assert capsys.readouterr().out.count("Usage: pyrun") == 3


def test_script_exception(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    _write(
        working_dir / "fail.py",
        "class Program:\n"
        "    @staticmethod\n"
        "    def Main(args):\n"
        "        raise RuntimeError('boom')\n",
    )

    assert run_pyrun("fail.py") == 1
    assert "SCRIPT EXCEPTION: boom" in capsys.readouterr().out


def test_compile_error(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    _write(working_dir / "broken.py", "class Program\n")

    assert run_pyrun("broken.py") == 1
    out = capsys.readouterr().out
    assert "broken.py(1," in out
    assert "Compilation failed with errors." in out


def test_missing_entry_point(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    _write(working_dir / "hello.py", _hello)

    assert run_pyrun("//entrypoint:Program.Run", "hello.py") == 1
    assert "Couldn't get entry point Program.Run" in capsys.readouterr().out


def test_invalid_warning_level(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    _write(working_dir / "hello.py", _hello)

    assert run_pyrun("//warninglevel:abc", "hello.py") == 1
    assert "Warning level expects a valid integer." in capsys.readouterr().out


def test_missing_reference(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    _write(working_dir / "hello.py", _hello)

    assert run_pyrun("//ref:no_such_module_for_pyrun", "hello.py") == 1
    assert "no_such_module_for_pyrun" in capsys.readouterr().out


def test_missing_file(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    assert run_pyrun("missing.py") == 1
    assert "Error reading script" in capsys.readouterr().out


def test_settings_file(working_dir: Path, capsys: CaptureFixture[str]) -> None:
    _write(working_dir / "pyrun.yml", "entry_point: App.go\nlocal_references: false\n")
    _write(
        working_dir / "app.py",
        "class App:\n"
        "    @classmethod\n"
        "    def go(cls, args):\n"
        "        print(cls.__name__)\n",
    )

    assert run_pyrun("app.py") == 0
    assert capsys.readouterr().out.endswith("App\n")


def test_script_exit_code(working_dir: Path) -> None:
    _write(
        working_dir / "exit.py",
        "import sys\n"
        "class Program:\n"
        "    @staticmethod\n"
        "    def Main(args):\n"
        "        sys.exit(int(args[0]))\n",
    )

    assert run_pyrun("exit.py", "4") == 4


def test_malformed_settings_file(
    working_dir: Path, capsys: CaptureFixture[str]
) -> None:
    _write(working_dir / "pyrun.yml", "warning_level: [1\n")
    _write(working_dir / "hello.py", _hello)

    assert run_pyrun("hello.py") == 1
    assert "invalid settings" in capsys.readouterr().out
