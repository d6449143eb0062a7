"""Configuration assembly.

:class:`ConfigAssembler` turns a :class:`~litestar_webpack.config.BuildContext`
into one :class:`Configuration` for the bundler:

1. discover the page entries,
2. compute externals, optimization, output naming, module rules and plugins,
3. hand the configuration to the project's override hook, if any,
4. wrap the resulting entry value so ``main.js`` is always folded into
   ``static/commons/main.js``, whatever the hook did.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from litestar_webpack.config import BuildContext, FrameworkPaths, ProjectConfig
from litestar_webpack.config._constants import RECORDS_FILE
from litestar_webpack.entries import EntryResolver, EntrySource, LegacyMainEntry, resolve_entries
from litestar_webpack.externals import externals_config
from litestar_webpack.loaders import DefaultLoaders, ModuleRule, default_loaders, module_rules
from litestar_webpack.optimization import OptimizationConfig, optimization_config
from litestar_webpack.output import OutputConfig, OutputNamingPolicy
from litestar_webpack.pages import PageDiscoveryOptions, get_pages
from litestar_webpack.plugins import BuildFlags, PluginDescriptor, default_plugin_pipeline
from litestar_webpack.utils import node_path_list

if TYPE_CHECKING:
    from litestar_webpack.pages import PageDiscovery
    from litestar_webpack.resolver import ModuleResolver

__all__ = (
    "ConfigAssembler",
    "Configuration",
    "OverrideContext",
    "OverrideHook",
    "ResolveConfig",
    "apply_override_hook",
    "get_base_config",
)

logger = logging.getLogger("litestar_webpack")

ExternalsHandler = Callable[[str], "str | None"]


@dataclass(frozen=True)
class ResolveConfig:
    """Module resolution rules.

    Attributes:
        modules: Directories searched for bare requests, in order.
        extensions: Extensions tried for requests without one.
        alias: Request prefixes redirected to a fixed location.
    """

    modules: "tuple[str, ...]"
    extensions: "tuple[str, ...]" = (".js", ".jsx", ".json")
    alias: "Mapping[str, str]" = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"modules": list(self.modules)}
        if self.extensions:
            payload["extensions"] = list(self.extensions)
        if self.alias:
            payload["alias"] = dict(self.alias)
        return payload


@dataclass(frozen=True)
class Configuration:
    """The assembled bundler configuration of one compilation.

    Instances are immutable; override hooks build a modified copy with
    :func:`dataclasses.replace`.
    """

    name: "Literal['client', 'server']"
    mode: "Literal['development', 'production']"
    target: "Literal['web', 'node']"
    context: Path
    entry: EntrySource
    output: OutputConfig
    resolve: ResolveConfig
    resolve_loader: ResolveConfig
    optimization: OptimizationConfig
    records_path: Path
    module_rules: "tuple[ModuleRule, ...]" = ()
    externals: "tuple[ExternalsHandler, ...]" = ()
    plugins: "tuple[PluginDescriptor, ...]" = ()
    devtool: "str | None" = None
    cache: bool = True
    performance_hints: bool = False

    def entries(self) -> dict[str, list[str]]:
        """Evaluate the entry value."""
        return resolve_entries(self.entry)

    def to_dict(self) -> dict[str, Any]:
        """Render the configuration as the bundler-facing mapping, entries evaluated."""
        return {
            "name": self.name,
            "mode": self.mode,
            "target": self.target,
            "devtool": self.devtool or False,
            "cache": self.cache,
            "context": str(self.context),
            "recordsPath": str(self.records_path),
            "entry": self.entries(),
            "output": self.output.to_dict(),
            "performance": {"hints": self.performance_hints},
            "resolve": self.resolve.to_dict(),
            "resolveLoader": self.resolve_loader.to_dict(),
            "module": {"rules": [rule.to_dict() for rule in self.module_rules]},
            "externals": [_describe(handler) for handler in self.externals],
            "optimization": self.optimization.to_dict(),
            "plugins": [_describe(plugin) for plugin in self.plugins],
        }


def _describe(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {"type": "function", "name": getattr(value, "__qualname__", repr(value))}


@dataclass(frozen=True)
class OverrideContext:
    """Everything an override hook may consult besides the configuration itself."""

    directory: Path
    dev: bool
    is_server: bool
    build_id: str
    config: ProjectConfig
    default_loaders: DefaultLoaders
    total_pages: int


OverrideHook = Callable[[Configuration, OverrideContext], Configuration]


def apply_override_hook(configuration: Configuration, context: OverrideContext) -> Configuration:
    """Run the project's override hook.

    The hook's return value replaces the configuration as-is; exceptions it
    raises propagate to the caller.

    Args:
        configuration: The assembled configuration.
        context: The hook context.

    Returns:
        The hook's result, or ``configuration`` when the project has no hook.
    """
    hook = context.config.override_hook
    if hook is None:
        return configuration
    logger.debug("Applying override hook %r to the %s configuration", hook, configuration.name)
    return hook(configuration, context)


class ConfigAssembler:
    """Assemble bundler configurations.

    The assembler holds only its collaborators; every call to :meth:`assemble`
    computes a new configuration from the given context.
    """

    __slots__ = ("_framework_package", "_page_discovery", "_resolver")

    def __init__(
        self,
        page_discovery: "PageDiscovery" = get_pages,
        resolver: "ModuleResolver | None" = None,
        framework_package: "str | None" = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            page_discovery: Callable producing the page entries.
            resolver: Module resolver used for server externals. Defaults to Node resolution.
            framework_package: npm name of the framework package. Defaults to ``next``.
        """
        self._page_discovery = page_discovery
        self._resolver = resolver
        self._framework_package = framework_package

    def framework_paths(self, directory: Path) -> FrameworkPaths:
        if self._framework_package is None:
            return FrameworkPaths(directory)
        return FrameworkPaths(directory, package=self._framework_package)

    def assemble(self, context: BuildContext) -> Configuration:
        """Assemble the configuration of one compilation.

        Args:
            context: The build context.

        Returns:
            The final configuration.
        """
        directory = context.project_dir
        project = context.config
        framework = self.framework_paths(directory)
        node_paths = node_path_list()
        output_path = context.output_path

        page_entries = self._page_discovery(
            directory,
            PageDiscoveryOptions(
                pages_dir=framework.default_pages_dir,
                dev=context.dev,
                is_server=context.is_server,
                extension_pattern=project.extension_pattern,
            ),
        )
        entry_resolver = EntryResolver.from_context(context, page_entries, framework=framework)
        total_pages = entry_resolver.total_pages
        logger.debug("Assembling %s configuration with %d page(s)", context.target_name, total_pages)

        loaders = default_loaders(
            directory,
            dev=context.dev,
            is_server=context.is_server,
            extension_pattern=project.extension_pattern,
        )
        flags = BuildFlags(dev=context.dev, is_server=context.is_server)

        configuration = Configuration(
            name=context.target_name,
            mode="development" if context.dev else "production",
            target="node" if context.is_server else "web",
            devtool="cheap-module-source-map" if context.dev else None,
            context=directory,
            entry=entry_resolver,
            output=OutputConfig(
                path=output_path,
                naming=OutputNamingPolicy(dev=context.dev, is_server=context.is_server),
            ),
            resolve=ResolveConfig(
                modules=(str(framework.node_modules), "node_modules", *node_paths),
                alias={framework.package: str(framework.package_root)},
            ),
            resolve_loader=ResolveConfig(
                modules=(str(framework.node_modules), "node_modules", str(framework.loaders_dir), *node_paths),
                extensions=(),
            ),
            module_rules=tuple(module_rules(directory, loaders, dev=context.dev, is_server=context.is_server)),
            externals=tuple(
                externals_config(directory, context.is_server, self._resolver, framework_package=framework.package)
            ),
            optimization=optimization_config(dev=context.dev, is_server=context.is_server, total_pages=total_pages),
            plugins=tuple(default_plugin_pipeline(output_path).build(flags)),
            records_path=output_path / RECORDS_FILE,
        )

        configuration = apply_override_hook(
            configuration,
            OverrideContext(
                directory=directory,
                dev=context.dev,
                is_server=context.is_server,
                build_id=context.build_id,
                config=project,
                default_loaders=loaders,
                total_pages=total_pages,
            ),
        )
        return replace(configuration, entry=LegacyMainEntry(configuration.entry))


def get_base_config(
    directory: "str | Path",
    *,
    build_id: str,
    dev: bool = False,
    is_server: bool = False,
    config: "ProjectConfig | None" = None,
    page_discovery: "PageDiscovery" = get_pages,
    resolver: "ModuleResolver | None" = None,
) -> Configuration:
    """Assemble a configuration in one call.

    Args:
        directory: The project directory.
        build_id: Opaque build identifier.
        dev: Development build.
        is_server: Server compilation.
        config: Project configuration. Defaults to :class:`~litestar_webpack.config.ProjectConfig`.
        page_discovery: Callable producing the page entries.
        resolver: Module resolver used for server externals.

    Returns:
        The final configuration.
    """
    context = BuildContext(
        directory=Path(directory),
        build_id=build_id,
        dev=dev,
        is_server=is_server,
        config=config or ProjectConfig(),
    )
    return ConfigAssembler(page_discovery=page_discovery, resolver=resolver).assemble(context)
