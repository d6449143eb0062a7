"""Litestar-Webpack Configuration.

The configuration is split into logical groups:

- ProjectConfig: what a project supplies (output directory, page extensions, override hook)
- FrameworkPaths: where the framework package lives inside the project
- BuildContext: the inputs of a single assembly (dev/prod, client/server, build id)
- LoggingConfig: verbosity of the ``litestar_webpack`` logger
- WebpackConfig: root configuration used by the Litestar plugin and CLI

Example usage::

    # Defaults: `.next` output, `jsx`/`js` pages
    WebpackPlugin(config=WebpackConfig())

    # Development build with a custom output directory
    WebpackPlugin(config=WebpackConfig(dev_mode=True, project=ProjectConfig(dist_dir="build")))
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from litestar_webpack.config._constants import DEFAULT_BUILD_ID, DEFAULT_FRAMEWORK_PACKAGE, TRUE_VALUES
from litestar_webpack.config._context import BuildContext
from litestar_webpack.config._logging import LoggingConfig
from litestar_webpack.config._paths import FrameworkPaths
from litestar_webpack.config._project import ProjectConfig

__all__ = (
    "TRUE_VALUES",
    "BuildContext",
    "FrameworkPaths",
    "LoggingConfig",
    "ProjectConfig",
    "WebpackConfig",
)


@dataclass
class WebpackConfig:
    """Root Webpack configuration.

    Attributes:
        root: The project directory. Defaults to the current working directory.
        project: Project settings handed to the assembler.
        dev_mode: Assemble development configurations by default.
        build_id: Build identifier passed through to the override hook.
        framework_package: npm name of the framework package providing bootstrap and default pages.
        asset_url: URL prefix the built static files are served from.
        set_static_folders: Serve ``{dist_dir}/static`` at ``asset_url``.
        logging: Logging configuration (True/None/False use defaults).
    """

    root: "str | Path" = field(default_factory=Path.cwd)
    project: ProjectConfig = field(default_factory=ProjectConfig)
    dev_mode: bool = field(
        default_factory=lambda: os.getenv("LITESTAR_WEBPACK_DEV_MODE", "False") in TRUE_VALUES,
    )
    build_id: str = field(default_factory=lambda: os.getenv("LITESTAR_WEBPACK_BUILD_ID", DEFAULT_BUILD_ID))
    framework_package: str = DEFAULT_FRAMEWORK_PACKAGE
    asset_url: str = field(default_factory=lambda: os.getenv("ASSET_URL", "/_next/static/"))
    set_static_folders: bool = True
    logging: "LoggingConfig | bool | None" = None

    def __post_init__(self) -> None:
        """Normalize paths and the logging shortcut."""
        if isinstance(self.root, str):
            self.root = Path(self.root)
        if not isinstance(self.logging, LoggingConfig):
            self.logging = LoggingConfig()
        if self.asset_url and self.asset_url != "/" and not self.asset_url.endswith("/"):
            self.asset_url = f"{self.asset_url}/"

    @property
    def root_dir(self) -> Path:
        return Path(self.root)

    @property
    def logging_config(self) -> LoggingConfig:
        """Logging configuration, normalized in ``__post_init__``."""
        if isinstance(self.logging, LoggingConfig):
            return self.logging
        return LoggingConfig()

    @property
    def dist_dir(self) -> Path:
        """Absolute output directory of the client build."""
        return self.root_dir / self.project.dist_dir

    @property
    def static_dir(self) -> Path:
        return self.dist_dir / "static"

    @property
    def framework(self) -> FrameworkPaths:
        return FrameworkPaths(self.root_dir, package=self.framework_package)

    def build_context(
        self,
        *,
        is_server: bool = False,
        dev: "bool | None" = None,
        build_id: "str | None" = None,
    ) -> BuildContext:
        """Create the context for one assembly.

        Args:
            is_server: Assemble the server compilation.
            dev: Override ``dev_mode``.
            build_id: Override ``build_id``.

        Returns:
            A new build context.
        """
        return BuildContext(
            directory=self.root_dir,
            build_id=build_id or self.build_id,
            dev=self.dev_mode if dev is None else dev,
            is_server=is_server,
            config=self.project,
        )
