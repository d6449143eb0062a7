"""Default loaders and module rules."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from litestar_webpack.config._constants import PAGES_DIR

__all__ = ("DefaultLoaders", "LoaderSpec", "ModuleRule", "default_loaders", "module_rules")

BABEL_LOADER = "babel-loader"
HOT_SELF_ACCEPT_LOADER = "hot-self-accept-loader"
SCRIPT_TEST = r"\.(js|jsx)$"


@dataclass(frozen=True)
class LoaderSpec:
    """A loader reference with its options."""

    loader: str
    options: "dict[str, Any]" = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"loader": self.loader, "options": _jsonable(self.options)}


@dataclass(frozen=True)
class DefaultLoaders:
    """Loaders available to the override hook for its own rules."""

    babel: LoaderSpec
    hot_self_accept: LoaderSpec

    def to_dict(self) -> dict[str, Any]:
        return {"babel": self.babel.to_dict(), "hotSelfAccept": self.hot_self_accept.to_dict()}


@dataclass(frozen=True)
class ModuleRule:
    """Apply ``use`` to modules matching ``test`` inside ``include`` and outside ``exclude``."""

    test: str
    use: LoaderSpec
    include: "tuple[str, ...]" = ()
    exclude: "str | None" = None

    def matches(self, module_path: str) -> bool:
        if not re.search(self.test, module_path):
            return False
        if self.include and not any(module_path.startswith(prefix) for prefix in self.include):
            return False
        return not (self.exclude and re.search(self.exclude, module_path))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"test": self.test, "include": list(self.include), "use": self.use.to_dict()}
        if self.exclude is not None:
            payload["exclude"] = self.exclude
        return payload


def _jsonable(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def page_extensions_pattern(extension_pattern: str) -> str:
    return rf"\.+({extension_pattern})$"


def default_loaders(directory: Path, *, dev: bool, is_server: bool, extension_pattern: str) -> DefaultLoaders:
    """Build the loaders the project can reuse.

    Args:
        directory: The project directory.
        dev: Development build.
        is_server: Server compilation.
        extension_pattern: Page extensions joined with ``|``.

    Returns:
        The default loaders.
    """
    return DefaultLoaders(
        babel=LoaderSpec(BABEL_LOADER, {"dev": dev, "isServer": is_server}),
        hot_self_accept=LoaderSpec(
            HOT_SELF_ACCEPT_LOADER,
            {
                "include": [str(directory / PAGES_DIR)],
                "extensions": page_extensions_pattern(extension_pattern),
            },
        ),
    )


def module_rules(directory: Path, loaders: DefaultLoaders, *, dev: bool, is_server: bool) -> list[ModuleRule]:
    """Build the module rules of a compilation.

    Every page module is hot-accepted in client development builds so that
    extensions added through ``page_extensions`` need no extra loader setup.

    Returns:
        The rules, in application order.
    """
    rules: list[ModuleRule] = []
    if dev and not is_server:
        options = loaders.hot_self_accept.options
        rules.append(
            ModuleRule(
                test=options["extensions"],
                include=tuple(options["include"]),
                use=loaders.hot_self_accept,
            )
        )
    rules.append(ModuleRule(test=SCRIPT_TEST, include=(str(directory),), exclude="node_modules", use=loaders.babel))
    return rules
