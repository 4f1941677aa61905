"""Resolve reference names into importable modules.

A reference name is a module name, optionally qualified with the version of the \
distribution that ships it:

    json
    xml.etree.ElementTree
    yaml==6.0.1

Exact resolution only accepts a name that the import system finds as written, with \
a matching version if one is given. Fuzzy resolution ignores the version, the case \
of the top-level module and also accepts distribution names (`PyYAML` for `yaml`).
"""

from collections.abc import Iterator
from functools import cached_property
from importlib.machinery import ModuleSpec
from logging import getLogger
from re import compile as re_compile

from ..exceptions import ConfigurationError, ReferenceNotFoundError
from ..models import NotFound, Reference, Resolved, ResolvedWithWarning, ResolveResult
from .protocols import ResolverProtocol

_logger = getLogger(__name__)
_qualified_name = re_compile(r"^(?P<name>[^=\s]+)\s*(?:==\s*(?P<version>\S+))?$")
_distribution_separators = re_compile(r"[-_.]+")


def split_reference_name(name: str) -> tuple[str, str | None]:
    """Split a reference name into a module name and an optional version."""
    stripped = name.strip()
    match = _qualified_name.match(stripped)
    if match is None:
        return stripped, None
    return match["name"], match["version"]


def module_location(spec: ModuleSpec) -> str:
    if spec.origin is not None:
        return spec.origin
    # Namespace packages have no origin
    if spec.submodule_search_locations:
        return next(iter(spec.submodule_search_locations))
    return spec.name


def _is_module_name(name: str) -> bool:
    return all(part.isidentifier() for part in name.split("."))


def _find_spec(name: str) -> ModuleSpec | None:
    from importlib.util import find_spec

    try:
        return find_spec(name)
    except Exception:  # noqa: BLE001
        # Finding a submodule imports its parent package, which may fail in any way
        return None


def _normalize_distribution(name: str) -> str:
    return _distribution_separators.sub("-", name).lower()


def _require_name(name: str) -> str:
    if not name or not name.strip():
        msg = "missing reference name"
        raise ConfigurationError(msg)
    return name


class ReferenceResolver(ResolverProtocol):
    """Resolve references against the modules visible to the import system."""

    def resolve_exact(self, name: str) -> Reference:
        """Resolve `name` without widening the match.

        Args:
            name: Module name, optionally followed by `==version`.

        Raises:
            ReferenceNotFoundError: Raised if the module cannot be found as written or \
                if none of the distributions shipping it has the requested version.

        Returns:
            The resolved reference.
        """
        module_name, version = split_reference_name(_require_name(name))
        spec = _find_spec(module_name) if _is_module_name(module_name) else None
        if spec is None:
            raise ReferenceNotFoundError(name)
        versions = self._versions(module_name)
        if version is not None and version not in versions:
            raise ReferenceNotFoundError(name)
        return Reference(
            name=module_name,
            location=module_location(spec),
            version=version if version is not None else next(iter(versions), None),
        )

    def resolve_fuzzy(self, name: str) -> Reference:
        """Resolve `name`, accepting partial matches.

        The version is ignored. The top-level module is looked up as written, then \
        case-insensitively, then as a distribution name.

        Args:
            name: Module or distribution name, optionally followed by `==version`.

        Raises:
            ReferenceNotFoundError: Raised if no candidate can be imported.

        Returns:
            The first candidate the import system can find.
        """
        module_name, _ = split_reference_name(_require_name(name))
        top_level, _, rest = module_name.partition(".")
        for candidate in self._candidates(top_level):
            full_name = f"{candidate}.{rest}" if rest else candidate
            if not _is_module_name(full_name):
                continue
            spec = _find_spec(full_name)
            if spec is not None:
                return Reference(
                    name=full_name,
                    location=module_location(spec),
                    version=next(iter(self._versions(full_name)), None),
                )
        raise ReferenceNotFoundError(name)

    def resolve(self, name: str, *, must_fully_match: bool = False) -> ResolveResult:
        try:
            reference = self.resolve_exact(name)
        except ReferenceNotFoundError:
            if must_fully_match:
                return NotFound(name)
        else:
            _logger.debug("Resolved reference %s to %s", name, reference.location)
            return Resolved(reference)
        try:
            reference = self.resolve_fuzzy(name)
        except ReferenceNotFoundError:
            return NotFound(name)
        _logger.debug("Partially resolved reference %s to %s", name, reference.identity)
        return ResolvedWithWarning(
            reference, partial_name=name, resolved_name=reference.identity
        )

    def _candidates(self, top_level: str) -> Iterator[str]:
        yield top_level
        folded = top_level.casefold()
        yield from (
            module
            for module in self._top_level_modules
            if module.casefold() == folded and module != top_level
        )
        normalized = _normalize_distribution(top_level)
        shipped = (
            module
            for module, distributions in self._distributions.items()
            if any(_normalize_distribution(d) == normalized for d in distributions)
        )
        # Public modules first: PyYAML ships both yaml and _yaml
        yield from sorted(shipped, key=lambda module: (module.startswith("_"), module))

    def _versions(self, module_name: str) -> tuple[str, ...]:
        from importlib.metadata import PackageNotFoundError, version

        top_level = module_name.partition(".")[0]
        versions = []
        for distribution in self._distributions.get(top_level, ()):
            try:
                versions.append(version(distribution))
            except PackageNotFoundError:
                continue
        return tuple(versions)

    @cached_property
    def _distributions(self) -> dict[str, list[str]]:
        from importlib.metadata import packages_distributions

        return dict(packages_distributions())

    @cached_property
    def _top_level_modules(self) -> tuple[str, ...]:
        from pkgutil import iter_modules
        from sys import builtin_module_names

        return tuple(
            sorted(
                set(builtin_module_names) | {module.name for module in iter_modules()}
            )
        )
