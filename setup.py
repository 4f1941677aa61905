from importlib.machinery import SourceFileLoader
from pathlib import Path
from types import ModuleType

from setuptools import find_packages, setup


loader = SourceFileLoader("pyrun", "./src/pyrun/__init__.py")
pyrun = ModuleType(loader.name)
loader.exec_module(pyrun)

setup(
    name="pyrun",
    version=pyrun.__version__,  # type: ignore
    description="Compile a Python file in memory and run a named entry point.",
    long_description=(Path(__file__).parent / "README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    python_requires=">=3.12",
    package_dir={"": "src"},
    packages=find_packages(where="src", exclude=["tests"]),
    entry_points={"console_scripts": ["pyrun=pyrun.cli:main"]},
    install_requires=["appdirs", "cyclopts>=3", "pydantic>=2", "PyYAML", "rich"],
    extras_require={"test": ["pytest"]},
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
