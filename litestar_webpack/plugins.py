"""Build observer plugin pipeline.

Plugins are declared once, each with the build flags it applies to, and
instantiated in declaration order. The order matters: the manifest plugins at
the end must observe the compilation after chunk naming is settled.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from litestar.serialization import encode_json

from litestar_webpack.config._constants import BUILD_MANIFEST, PAGES_MANIFEST, REACT_LOADABLE_MANIFEST

__all__ = (
    "BuildFlags",
    "PluginDescriptor",
    "PluginPipeline",
    "default_plugin_pipeline",
)


@dataclass(frozen=True)
class BuildFlags:
    dev: bool
    is_server: bool


@dataclass(frozen=True)
class PluginDescriptor:
    """A plugin the bundler instantiates; only its name and options are known here."""

    name: str
    options: "dict[str, Any]" = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "options": dict(self.options)}


Predicate = Callable[[BuildFlags], bool]
Factory = Callable[[BuildFlags], PluginDescriptor]


def always(flags: BuildFlags) -> bool:
    return True


def dev_only(flags: BuildFlags) -> bool:
    return flags.dev


def production_only(flags: BuildFlags) -> bool:
    return not flags.dev


def server_only(flags: BuildFlags) -> bool:
    return flags.is_server


def client_only(flags: BuildFlags) -> bool:
    return not flags.is_server


def dev_client_only(flags: BuildFlags) -> bool:
    return flags.dev and not flags.is_server


class PluginPipeline:
    """Ordered list of (predicate, factory) declarations."""

    __slots__ = ("_steps",)

    def __init__(self) -> None:
        self._steps: list[tuple[Predicate, Factory]] = []

    def __len__(self) -> int:
        return len(self._steps)

    def add(self, factory: "Factory | PluginDescriptor", when: Predicate = always) -> "PluginPipeline":
        """Declare a plugin.

        Args:
            factory: The plugin, or a callable building it from the build flags.
            when: Predicate deciding whether the plugin applies.

        Returns:
            The pipeline, for chaining.
        """
        if isinstance(factory, PluginDescriptor):
            descriptor = factory
            self._steps.append((when, lambda _flags: descriptor))
        else:
            self._steps.append((when, factory))
        return self

    def build(self, flags: BuildFlags) -> list[PluginDescriptor]:
        """Instantiate every plugin whose predicate holds, in declaration order."""
        plugins: list[PluginDescriptor] = []
        for predicate, factory in self._steps:
            if predicate(flags):
                plugins.append(factory(flags))
        return plugins


def default_plugin_pipeline(output_path: Path) -> PluginPipeline:
    """Declare the plugins every project gets.

    Args:
        output_path: Output directory of the compilation, used by the server module cache plugin.

    Returns:
        The pipeline; call :meth:`PluginPipeline.build` with the build flags.
    """
    return (
        PluginPipeline()
        .add(PluginDescriptor("ChunkNamesPlugin"))
        .add(PluginDescriptor("ReactLoadablePlugin", {"filename": REACT_LOADABLE_MANIFEST}), when=client_only)
        .add(lambda flags: PluginDescriptor("WebpackBar", {"name": "server" if flags.is_server else "client"}))
        .add(PluginDescriptor("FriendlyErrorsWebpackPlugin"), when=dev_client_only)
        # The optional precomputed tables of elliptic break bundling on both targets.
        .add(
            PluginDescriptor(
                "IgnorePlugin",
                {"resourceRegExp": "(precomputed)", "contextRegExp": "node_modules.+(elliptic)"},
            )
        )
        # Both compilations clear the require cache: the client one writes the build manifest the server reads.
        .add(PluginDescriptor("RequireCacheHotReloaderPlugin"), when=dev_only)
        .add(PluginDescriptor("HotModuleReplacementPlugin"), when=dev_client_only)
        .add(PluginDescriptor("NoEmitOnErrorsPlugin"), when=dev_only)
        .add(PluginDescriptor("UnlinkFilePlugin"), when=dev_only)
        .add(PluginDescriptor("CaseSensitivePathsPlugin"), when=dev_only)
        .add(
            PluginDescriptor("WriteFilePlugin", {"exitOnErrors": False, "log": False, "useHashIndex": False}),
            when=dev_only,
        )
        .add(
            lambda flags: PluginDescriptor(
                "DefinePlugin",
                {"process.env.NODE_ENV": encode_json("development" if flags.dev else "production").decode()},
            )
        )
        .add(PluginDescriptor("ModuleConcatenationPlugin"), when=production_only)
        .add(PluginDescriptor("PagesManifestPlugin", {"filename": PAGES_MANIFEST}), when=server_only)
        .add(PluginDescriptor("BuildManifestPlugin", {"filename": BUILD_MANIFEST}), when=client_only)
        .add(PluginDescriptor("PagesPlugin"), when=client_only)
        .add(PluginDescriptor("SsrImportPlugin"), when=server_only)
        .add(PluginDescriptor("SsrModuleCachePlugin", {"outputPath": str(output_path)}), when=server_only)
    )
