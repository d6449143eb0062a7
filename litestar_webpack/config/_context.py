"""Per-invocation build context."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from litestar_webpack.config._constants import SERVER_DIRECTORY
from litestar_webpack.config._project import ProjectConfig

__all__ = ("BuildContext",)


@dataclass(frozen=True)
class BuildContext:
    """Inputs for a single configuration assembly.

    Attributes:
        directory: The project directory.
        build_id: Opaque build identifier, threaded through to the override hook.
        dev: Development build.
        is_server: Server (Node) compilation instead of the browser one.
        config: Project configuration.
    """

    directory: "str | Path"
    build_id: str
    dev: bool = False
    is_server: bool = False
    config: ProjectConfig = field(default_factory=ProjectConfig)

    def __post_init__(self) -> None:
        if isinstance(self.directory, str):
            object.__setattr__(self, "directory", Path(self.directory))

    @property
    def project_dir(self) -> Path:
        return Path(self.directory)

    @property
    def target_name(self) -> "Literal['client', 'server']":
        return "server" if self.is_server else "client"

    @property
    def output_path(self) -> Path:
        """``{dir}/{dist_dir}`` for the client, ``{dir}/{dist_dir}/server`` for the server."""
        output = self.project_dir / self.config.dist_dir
        return output / SERVER_DIRECTORY if self.is_server else output
