"""Page discovery.

Scans ``<project>/pages`` for page modules and maps each one to an entry
chunk named ``bundles/pages/...``. Development builds only start with the
special ``_app``/``_error`` (and, on the server, ``_document``) pages; the
rest are added on demand by the dev server. The framework's bundled default
pages fill in any special page the project does not define.
"""

import posixpath
import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Protocol

from litestar_webpack.config._constants import BUNDLES_DIR, PAGES_DIR
from litestar_webpack.exceptions import PageDiscoveryError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from litestar_webpack.entries import PageEntries

__all__ = (
    "PageDiscovery",
    "PageDiscoveryOptions",
    "create_entry",
    "get_page_entries",
    "get_page_paths",
    "get_pages",
)


@dataclass(frozen=True)
class PageDiscoveryOptions:
    """Options handed to a page discovery callable.

    Attributes:
        pages_dir: The framework's bundled default pages.
        dev: Development build.
        is_server: Server compilation.
        extension_pattern: Page extensions joined with ``|``.
    """

    pages_dir: Path
    dev: bool
    is_server: bool
    extension_pattern: str


class PageDiscovery(Protocol):
    """Produce the page entries of a project."""

    def __call__(self, directory: Path, options: PageDiscoveryOptions) -> "PageEntries": ...


def _special_pages(is_server: bool) -> "tuple[str, ...]":
    return ("_document", "_app", "_error") if is_server else ("_app", "_error")


def get_page_paths(directory: Path, *, dev: bool, is_server: bool, extension_pattern: str) -> list[str]:
    """List page modules relative to the project directory.

    Args:
        directory: The project directory.
        dev: Only the special pages are listed in development.
        is_server: ``_document`` is a server-only page.
        extension_pattern: Page extensions joined with ``|``.

    Raises:
        PageDiscoveryError: If the pages directory exists but cannot be read.

    Returns:
        Sorted POSIX paths such as ``pages/blog/index.js``.
    """
    pages_root = directory / PAGES_DIR
    if not pages_root.exists():
        return []
    if not pages_root.is_dir():
        raise PageDiscoveryError(str(pages_root), "not a directory")

    extension = re.compile(rf"\.({extension_pattern})$")
    try:
        candidates = pages_root.glob("*") if dev else pages_root.rglob("*")
        files = [path for path in candidates if path.is_file() and extension.search(path.name)]
    except OSError as e:
        raise PageDiscoveryError(str(pages_root), str(e)) from e

    special = _special_pages(is_server)
    pages: list[str] = []
    for path in files:
        stem = extension.sub("", path.name)
        if dev and stem not in special:
            continue
        if not is_server and path.name.startswith("_document"):
            continue
        pages.append(path.relative_to(directory).as_posix())
    return sorted(pages)


def create_entry(
    file_path: str,
    *,
    name: "str | None" = None,
    extension_pattern: "str | None" = None,
) -> tuple[str, list[str]]:
    """Map a page module to its entry.

    ``pages/blog/index.js`` compiles to ``pages/blog.js``; ``pages/index.js``
    stays as-is so ``/`` still routes to it. Page extensions become ``.js``.

    Args:
        file_path: Page module path, relative to the project or absolute.
        name: Entry name to use instead of ``file_path``.
        extension_pattern: Page extensions joined with ``|``.

    Returns:
        The entry name and its module list.
    """
    parsed = PurePosixPath(file_path)
    entry_name = name or file_path
    if str(parsed.parent) != PAGES_DIR and parsed.stem == "index":
        entry_name = f"{parsed.parent}.js"
    if extension_pattern:
        entry_name = re.sub(rf"\.+({extension_pattern})$", ".js", entry_name)
    module = file_path if parsed.is_absolute() else f"./{file_path}"
    return posixpath.join(BUNDLES_DIR, entry_name), [module]


def get_page_entries(
    page_paths: "Iterable[str]",
    *,
    pages_dir: Path,
    is_server: bool = False,
    extension_pattern: "str | None" = None,
) -> dict[str, list[str]]:
    """Build the entry mapping for the given page modules.

    Args:
        page_paths: Page modules, as returned by :func:`get_page_paths`.
        pages_dir: The framework's bundled default pages.
        is_server: Also fall back to the default ``_document``.
        extension_pattern: Page extensions joined with ``|``.

    Returns:
        Entry name to module list.
    """
    entries: dict[str, list[str]] = {}
    for file_path in page_paths:
        entry_name, modules = create_entry(file_path, extension_pattern=extension_pattern)
        entries[entry_name] = modules

    for special in _special_pages(is_server):
        default_path = (pages_dir / f"{special}.js").as_posix()
        entry_name, modules = create_entry(default_path, name=f"{PAGES_DIR}/{special}.js")
        entries.setdefault(entry_name, modules)
    return entries


def get_pages(directory: Path, options: PageDiscoveryOptions) -> dict[str, list[str]]:
    """Default :class:`PageDiscovery` implementation."""
    page_paths = get_page_paths(
        directory,
        dev=options.dev,
        is_server=options.is_server,
        extension_pattern=options.extension_pattern,
    )
    return get_page_entries(
        page_paths,
        pages_dir=options.pages_dir,
        is_server=options.is_server,
        extension_pattern=options.extension_pattern,
    )
