"""Litestar-Webpack: bundler configuration assembly for Litestar projects.

Given a project directory and a build context (development or production,
client or server), the assembler produces the complete bundler
configuration: entry points, module resolution, server externals, chunk
splitting, output naming and the ordered plugin list.

Basic usage:
    from litestar_webpack import ProjectConfig, get_base_config

    client = get_base_config(".", build_id="abc123", config=ProjectConfig(dist_dir=".next"))
    client.entries()  # {"static/commons/main.js": [...], "bundles/pages/_app.js": [...], ...}

With Litestar:
    from litestar import Litestar
    from litestar_webpack import WebpackConfig, WebpackPlugin

    app = Litestar(plugins=[WebpackPlugin(config=WebpackConfig(dev_mode=True))])
"""

from litestar_webpack.assembler import ConfigAssembler, Configuration, OverrideContext, get_base_config
from litestar_webpack.config import BuildContext, FrameworkPaths, LoggingConfig, ProjectConfig, WebpackConfig
from litestar_webpack.output import ChunkDescriptor
from litestar_webpack.plugin import WebpackPlugin

__all__ = (
    "BuildContext",
    "ChunkDescriptor",
    "ConfigAssembler",
    "Configuration",
    "FrameworkPaths",
    "LoggingConfig",
    "OverrideContext",
    "ProjectConfig",
    "WebpackConfig",
    "WebpackPlugin",
    "get_base_config",
)
