"""Node-style module resolution.

Resolves a module request (``lodash``, ``./lib/a``, ``@scope/pkg/sub``) the way
Node's ``require.resolve`` does: relative and absolute requests are tried as a
file, then as a directory; bare requests are looked up in every
``node_modules`` directory from the base directory up to the file system root,
then in the extra search paths (``NODE_PATH``).
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from litestar.exceptions import SerializationException
from litestar.serialization import decode_json

from litestar_webpack.exceptions import ModuleResolutionError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

__all__ = ("DEFAULT_EXTENSIONS", "ModuleResolver", "NodeResolver")

DEFAULT_EXTENSIONS = (".js", ".json", ".node")


class ModuleResolver(Protocol):
    """Resolve a module request to an absolute file path.

    Implementations raise :class:`~litestar_webpack.exceptions.ModuleResolutionError`
    when the request cannot be resolved.
    """

    def __call__(self, request: str, basedir: Path, *, preserve_symlinks: bool = True) -> Path: ...


class NodeResolver:
    """Default :class:`ModuleResolver` following Node's lookup algorithm."""

    __slots__ = ("extensions", "paths")

    def __init__(self, extensions: "Sequence[str]" = DEFAULT_EXTENSIONS, paths: "Sequence[str] | None" = None) -> None:
        """Initialize the resolver.

        Args:
            extensions: Extensions tried, in order, when the request has none.
            paths: Extra directories searched after the ``node_modules`` hierarchy.
        """
        self.extensions = tuple(extensions)
        self.paths = tuple(paths or ())

    def __call__(self, request: str, basedir: Path, *, preserve_symlinks: bool = True) -> Path:
        """Resolve ``request`` starting from ``basedir``.

        Args:
            request: The module request string.
            basedir: Directory the request is resolved from.
            preserve_symlinks: Keep symlinked paths as found instead of collapsing them to their target.

        Raises:
            ModuleResolutionError: If no file matches the request.

        Returns:
            The absolute path of the resolved file.
        """
        basedir = Path(os.path.abspath(basedir))
        if not request:
            raise ModuleResolutionError(request, str(basedir), "empty request")

        try:
            found = self._locate(request, basedir)
        except (OSError, ValueError) as e:
            raise ModuleResolutionError(request, str(basedir), str(e)) from e

        if found is None:
            raise ModuleResolutionError(request, str(basedir))
        if preserve_symlinks:
            return Path(os.path.normpath(found))
        return Path(os.path.realpath(found))

    def _locate(self, request: str, basedir: Path) -> "Path | None":
        if request.startswith(("./", "../", "/")) or request in {".", ".."}:
            candidate = Path(os.path.normpath(basedir / request))
            return self._load_as_file(candidate) or self._load_as_directory(candidate)
        for modules_dir in self._module_dirs(basedir):
            candidate = modules_dir / request
            found = self._load_as_file(candidate) or self._load_as_directory(candidate)
            if found is not None:
                return found
        return None

    def _module_dirs(self, basedir: Path) -> "Iterator[Path]":
        for directory in (basedir, *basedir.parents):
            if directory.name == "node_modules":
                continue
            yield directory / "node_modules"
        for path in self.paths:
            yield Path(path)

    def _load_as_file(self, candidate: Path) -> "Path | None":
        if candidate.is_file():
            return candidate
        for extension in self.extensions:
            with_extension = candidate.with_name(candidate.name + extension)
            if with_extension.is_file():
                return with_extension
        return None

    def _load_as_index(self, candidate: Path) -> "Path | None":
        return self._load_as_file(candidate / "index")

    def _load_as_directory(self, candidate: Path) -> "Path | None":
        if not candidate.is_dir():
            return None
        package_json = candidate / "package.json"
        if package_json.is_file():
            main = self._read_main(package_json)
            if main:
                target = candidate / main
                found = self._load_as_file(target) or self._load_as_index(target)
                if found is not None:
                    return found
        return self._load_as_index(candidate)

    @staticmethod
    def _read_main(package_json: Path) -> "str | None":
        try:
            payload: Any = decode_json(package_json.read_bytes())
        except (OSError, SerializationException) as e:
            raise ModuleResolutionError(str(package_json.parent), str(package_json.parent), str(e)) from e
        main = payload.get("main") if isinstance(payload, dict) else None
        return main if isinstance(main, str) else None
