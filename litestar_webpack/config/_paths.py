"""Locations of the framework package inside a project."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from litestar_webpack.config._constants import DEFAULT_FRAMEWORK_PACKAGE

__all__ = ("FrameworkPaths",)


@dataclass(frozen=True)
class FrameworkPaths:
    """File system layout of the framework's JavaScript package.

    The framework ships the client bootstrap, its default pages and its
    loaders under ``node_modules/<package>``; every path here is derived from
    that root unless ``root`` is given explicitly.

    Attributes:
        directory: The project directory.
        package: Name of the framework package on the npm registry.
        root: Installed framework package root. Defaults to ``<directory>/node_modules/<package>``.
    """

    directory: "str | Path"
    package: str = DEFAULT_FRAMEWORK_PACKAGE
    root: "str | Path | None" = field(default=None)

    def __post_init__(self) -> None:
        """Normalize path types to Path objects."""
        if isinstance(self.directory, str):
            object.__setattr__(self, "directory", Path(self.directory))
        if self.root is None:
            object.__setattr__(self, "root", Path(self.directory) / "node_modules" / self.package)
        elif isinstance(self.root, str):
            object.__setattr__(self, "root", Path(self.root))

    @property
    def package_root(self) -> Path:
        return cast("Path", self.root)

    @property
    def node_modules(self) -> Path:
        """Dependencies installed inside the framework package."""
        return self.package_root / "node_modules"

    @property
    def dist(self) -> Path:
        return self.package_root / "dist"

    @property
    def default_pages_dir(self) -> Path:
        """Bundled ``_app``/``_error``/``_document`` fallbacks."""
        return self.dist / "pages"

    @property
    def loaders_dir(self) -> Path:
        return self.dist / "build" / "webpack" / "loaders"

    def client_bootstrap(self, dev: bool) -> Path:
        """Return the client runtime bootstrap module.

        Args:
            dev: Whether the development bootstrap (with hot-reload wiring) is wanted.

        Returns:
            Absolute path of the bootstrap module, without extension.
        """
        return self.dist / "client" / (f"{self.package}-dev" if dev else self.package)
