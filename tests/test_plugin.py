import logging
from pathlib import Path

import pytest
from click import Group
from click.testing import CliRunner
from litestar import Litestar
from litestar.config.app import AppConfig

from litestar_webpack import LoggingConfig, ProjectConfig, WebpackConfig, WebpackPlugin
from litestar_webpack.assembler import ConfigAssembler
from litestar_webpack.cli import webpack_group


def test_plugin_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    plugin = WebpackPlugin()

    assert isinstance(plugin.config, WebpackConfig)
    assert isinstance(plugin.assembler, ConfigAssembler)


def test_on_cli_init_registers_group() -> None:
    cli = Group()

    WebpackPlugin(config=WebpackConfig(root=Path.cwd())).on_cli_init(cli)

    assert cli.commands["webpack"] is webpack_group
    assert set(webpack_group.commands) == {"config", "entries"}


def test_webpack_group_help() -> None:
    result = CliRunner().invoke(webpack_group, ["--help"])

    assert result.exit_code == 0
    assert "config" in result.output
    assert "entries" in result.output


def test_on_app_init_serves_static_output(tmp_path: Path) -> None:
    (tmp_path / ".next" / "static").mkdir(parents=True)
    plugin = WebpackPlugin(config=WebpackConfig(root=tmp_path))

    app_config = plugin.on_app_init(AppConfig())

    assert len(app_config.route_handlers) == 1


def test_on_app_init_without_static_folders(tmp_path: Path) -> None:
    plugin = WebpackPlugin(config=WebpackConfig(root=tmp_path, set_static_folders=False))

    assert plugin.on_app_init(AppConfig()).route_handlers == []


def test_assemble_uses_plugin_config(project_dir: Path) -> None:
    config = WebpackConfig(
        root=project_dir, project=ProjectConfig(dist_dir="out"), dev_mode=True, set_static_folders=False
    )
    plugin = WebpackPlugin(config=config)
    Litestar(plugins=[plugin])

    client = plugin.assemble()
    server = plugin.assemble(is_server=True, dev=False)

    assert client.mode == "development"
    assert client.output.path == project_dir / "out"
    assert server.mode == "production"
    assert server.output.path == project_dir / "out" / "server"


def test_on_app_init_applies_logging_level(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    logger = logging.getLogger("litestar_webpack")
    monkeypatch.setattr(logger, "level", logging.NOTSET)
    config = WebpackConfig(root=tmp_path, set_static_folders=False, logging=LoggingConfig(level="quiet"))

    WebpackPlugin(config=config).on_app_init(AppConfig())

    assert logger.level == logging.WARNING
