"""Litestar plugin exposing the configuration assembler."""

from typing import TYPE_CHECKING

from litestar.plugins import CLIPlugin, InitPluginProtocol
from litestar.static_files import create_static_files_router  # pyright: ignore[reportUnknownVariableType]

from litestar_webpack.assembler import ConfigAssembler
from litestar_webpack.config import WebpackConfig

if TYPE_CHECKING:
    from click import Group
    from litestar.config.app import AppConfig

    from litestar_webpack.assembler import Configuration


class WebpackPlugin(InitPluginProtocol, CLIPlugin):
    """Webpack plugin for Litestar.

    This plugin provides:

    - the ``litestar webpack`` CLI group
    - static file serving for the client build output
    - :meth:`assemble`, returning the bundler configuration for the application's project

    Example::

        from litestar import Litestar
        from litestar_webpack import WebpackConfig, WebpackPlugin

        app = Litestar(plugins=[WebpackPlugin(config=WebpackConfig(dev_mode=True))])
    """

    __slots__ = ("_assembler", "_config")

    def __init__(self, config: "WebpackConfig | None" = None, assembler: "ConfigAssembler | None" = None) -> None:
        """Initialize the Webpack plugin.

        Args:
            config: Webpack configuration. Defaults to WebpackConfig() if not provided.
            assembler: Assembler to use. Defaults to one with the default page discovery and resolver.
        """
        if config is None:
            config = WebpackConfig()
        self._config = config
        self._assembler = assembler or ConfigAssembler(framework_package=config.framework_package)

    @property
    def config(self) -> WebpackConfig:
        return self._config

    @property
    def assembler(self) -> ConfigAssembler:
        return self._assembler

    def on_cli_init(self, cli: "Group") -> None:
        from litestar_webpack.cli import webpack_group

        cli.add_command(webpack_group)

    def on_app_init(self, app_config: "AppConfig") -> "AppConfig":
        """Apply the logging level and serve the client build output at ``asset_url``.

        Args:
            app_config: The :class:`AppConfig <litestar.config.app.AppConfig>` instance.

        Returns:
            The application configuration.
        """
        self._config.logging_config.apply()
        if self._config.set_static_folders:
            app_config.route_handlers.append(
                create_static_files_router(
                    directories=[self._config.static_dir],
                    path=self._config.asset_url,
                    name="webpack",
                    html_mode=False,
                    include_in_schema=False,
                    opt={"exclude_from_auth": True},
                ),
            )
        return app_config

    def assemble(
        self,
        *,
        is_server: bool = False,
        dev: "bool | None" = None,
        build_id: "str | None" = None,
    ) -> "Configuration":
        """Assemble the bundler configuration for this application.

        Args:
            is_server: Assemble the server compilation.
            dev: Override ``dev_mode``.
            build_id: Override ``build_id``.

        Returns:
            The final configuration.
        """
        context = self._config.build_context(is_server=is_server, dev=dev, build_id=build_id)
        return self._assembler.assemble(context)
