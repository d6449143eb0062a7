from pathlib import Path
from typing import TYPE_CHECKING, Any

from click import Path as ClickPath
from click import group, option
from litestar.cli._utils import LitestarCLIException, LitestarGroup  # pyright: ignore[reportPrivateImportUsage]

if TYPE_CHECKING:
    from litestar import Litestar

    from litestar_webpack.assembler import Configuration


def _format_json(payload: Any) -> bytes:
    import msgspec
    from litestar.serialization import encode_json

    return msgspec.json.format(encode_json(payload), indent=2)


def _render_configuration(configuration: "Configuration") -> bytes:
    """Serialize an assembled configuration deterministically."""
    return _format_json(configuration.to_dict())


def _assemble(app: "Litestar", *, server: bool, dev: "bool | None", build_id: "str | None") -> "Configuration":
    from litestar_webpack.exceptions import LitestarWebpackError
    from litestar_webpack.plugin import WebpackPlugin

    plugin = app.plugins.get(WebpackPlugin)
    try:
        return plugin.assemble(is_server=server, dev=dev, build_id=build_id)
    except LitestarWebpackError as e:
        raise LitestarCLIException(str(e)) from e


@group(cls=LitestarGroup, name="webpack")
def webpack_group() -> None:
    """Manage Webpack configuration."""


@webpack_group.command(
    name="config",
    help="Print the assembled bundler configuration.",
)
@option("--server", type=bool, help="Assemble the server compilation.", default=False, is_flag=True)
@option("--dev/--prod", "dev", help="Override the configured build mode.", default=None)
@option("--build-id", type=str, help="Build identifier passed to the override hook.", default=None, required=False)
@option(
    "--output",
    type=ClickPath(dir_okay=False, file_okay=True, path_type=Path),
    help="Write the configuration to this file instead of the console.",
    default=None,
    required=False,
)
def webpack_config(
    app: "Litestar",
    server: bool,
    dev: "bool | None",
    build_id: "str | None",
    output: "Path | None",
) -> None:
    """Print the assembled bundler configuration."""
    from litestar.cli._utils import console  # pyright: ignore[reportPrivateImportUsage]

    configuration = _assemble(app, server=server, dev=dev, build_id=build_id)
    payload = _render_configuration(configuration)
    if output is None:
        console.print_json(payload.decode())
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(payload)
    console.print(f"[green]✓ {configuration.name} configuration written to {output}[/]")


@webpack_group.command(
    name="entries",
    help="Print the resolved entry points.",
)
@option("--server", type=bool, help="Resolve the server compilation entries.", default=False, is_flag=True)
@option("--dev/--prod", "dev", help="Override the configured build mode.", default=None)
def webpack_entries(app: "Litestar", server: bool, dev: "bool | None") -> None:
    """Print the resolved entry points."""
    from litestar.cli._utils import console  # pyright: ignore[reportPrivateImportUsage]
    from rich.markup import escape
    from rich.table import Table

    configuration = _assemble(app, server=server, dev=dev, build_id=None)
    entries = configuration.entries()
    table = Table(
        title=f"{configuration.name} entries ({len(entries)})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Chunk", no_wrap=True)
    table.add_column("Modules", overflow="fold")
    for name, modules in entries.items():
        table.add_row(f"[bold]{escape(name)}[/]", escape("\n".join(modules)))
    console.print(table)
