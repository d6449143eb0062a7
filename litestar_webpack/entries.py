"""Entry point mapping.

The client compilation always starts from two bootstrap entries:
``static/commons/main.js`` (the client runtime bootstrap) and ``main.js``,
an empty entry kept for projects whose override hook still pushes modules
into it. :func:`promote_legacy_main` folds ``main.js`` into
``static/commons/main.js``; it runs after the override hook so modules added
there are picked up.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Union

from litestar_webpack.config._constants import CLIENT_STATIC_FILES_RUNTIME_MAIN, LEGACY_MAIN_ENTRY
from litestar_webpack.config._paths import FrameworkPaths

if TYPE_CHECKING:
    from litestar_webpack.config import BuildContext

__all__ = (
    "EntrySource",
    "EntryResolver",
    "LegacyMainEntry",
    "PageEntries",
    "promote_legacy_main",
    "resolve_entries",
)

logger = logging.getLogger("litestar_webpack")

PageEntries = Mapping[str, Sequence[str]]
EntrySource = Union[Callable[[], PageEntries], PageEntries]
"""Entry value of a configuration: a mapping or a callable recomputing one."""


def _copy_entries(entries: PageEntries) -> dict[str, list[str]]:
    return {name: list(modules) for name, modules in entries.items()}


def resolve_entries(source: EntrySource) -> dict[str, list[str]]:
    """Evaluate an entry value into a fresh mapping.

    Args:
        source: A mapping or a zero-argument callable returning one.

    Returns:
        A new dict of new lists; mutating it never affects ``source``.
    """
    entries = source() if callable(source) else source
    return _copy_entries(entries)


def promote_legacy_main(entries: PageEntries) -> dict[str, list[str]]:
    """Fold ``main.js`` into ``static/commons/main.js``.

    ``main.js`` modules come first, then the existing ``static/commons/main.js``
    modules, each keeping its relative order. Mappings without ``main.js``
    (server compilations) are returned unchanged.

    Args:
        entries: Entry mapping.

    Returns:
        A new entry mapping without ``main.js``.
    """
    promoted = _copy_entries(entries)
    legacy = promoted.pop(LEGACY_MAIN_ENTRY, None)
    if legacy is None:
        return promoted
    if legacy:
        logger.debug("Promoting %d module(s) from %s", len(legacy), LEGACY_MAIN_ENTRY)
    promoted[CLIENT_STATIC_FILES_RUNTIME_MAIN] = [*legacy, *promoted.get(CLIENT_STATIC_FILES_RUNTIME_MAIN, [])]
    return promoted


class EntryResolver:
    """Recompute the entry mapping of one compilation.

    The bundler may call the resolver on every incremental rebuild; each call
    builds a new mapping from the stored inputs and never mutates them.
    """

    __slots__ = ("_bootstrap", "_is_server", "_page_entries")

    def __init__(
        self,
        page_entries: PageEntries,
        *,
        is_server: bool,
        dev: bool,
        directory: "str | Path",
        framework: "FrameworkPaths | None" = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            page_entries: Entries produced by page discovery.
            is_server: Server compilation; server builds get no bootstrap entries.
            dev: Development build; selects the development bootstrap module.
            directory: The project directory.
            framework: Framework package layout. Derived from ``directory`` when omitted.
        """
        framework = framework or FrameworkPaths(Path(directory))
        self._is_server = is_server
        self._bootstrap = str(framework.client_bootstrap(dev))
        self._page_entries = tuple((name, tuple(modules)) for name, modules in page_entries.items())

    @classmethod
    def from_context(
        cls,
        context: "BuildContext",
        page_entries: PageEntries,
        framework: "FrameworkPaths | None" = None,
    ) -> "EntryResolver":
        return cls(
            page_entries,
            is_server=context.is_server,
            dev=context.dev,
            directory=context.project_dir,
            framework=framework,
        )

    @property
    def total_pages(self) -> int:
        return len(self._page_entries)

    def base_entries(self) -> dict[str, list[str]]:
        """Bootstrap entries of the compilation, empty for the server."""
        if self._is_server:
            return {}
        return {
            LEGACY_MAIN_ENTRY: [],
            CLIENT_STATIC_FILES_RUNTIME_MAIN: [self._bootstrap],
        }

    def __call__(self) -> dict[str, list[str]]:
        """Return the bootstrap entries merged with the page entries.

        Page entries win on key collisions.
        """
        entries = self.base_entries()
        entries.update({name: list(modules) for name, modules in self._page_entries})
        return entries


class LegacyMainEntry:
    """Entry value applying :func:`promote_legacy_main` on every evaluation."""

    __slots__ = ("source",)

    def __init__(self, source: EntrySource) -> None:
        self.source = source

    def __call__(self) -> dict[str, list[str]]:
        return promote_legacy_main(resolve_entries(self.source))
