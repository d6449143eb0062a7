"""Server-side externals classification.

On the server, modules resolved into ``node_modules`` are not compiled into
the bundle; they are loaded by Node at runtime through ``require`` of the
original request. The framework's bundled default pages and the bundler's own
modules are the exceptions: both still go through the compiler.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

import anyio
import anyio.to_thread

from litestar_webpack.config._constants import DEFAULT_FRAMEWORK_PACKAGE
from litestar_webpack.exceptions import ModuleResolutionError
from litestar_webpack.resolver import NodeResolver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from litestar_webpack.resolver import ModuleResolver

__all__ = (
    "SCRIPT_EXTENSIONS",
    "ExternalsPolicy",
    "classify_request",
    "classify_requests",
    "externals_config",
)

logger = logging.getLogger("litestar_webpack")

SCRIPT_EXTENSIONS = (".js",)

# Matches any path segment starting with "webpack" under node_modules,
# e.g. node_modules/webpack-dev-middleware as well.
_BUNDLER_PATTERN = re.compile(r"node_modules[/\\]webpack")


@lru_cache
def _default_pages_pattern(framework_package: str) -> "re.Pattern[str]":
    name = re.escape(framework_package)
    return re.compile(rf"node_modules[/\\]{name}[/\\]dist[/\\]pages")


@lru_cache
def _dependency_script_pattern(extensions: "tuple[str, ...]") -> "re.Pattern[str]":
    alternatives = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(rf"node_modules[/\\].*(?:{alternatives})$")


def classify_request(
    request: str,
    *,
    directory: Path,
    resolver: "ModuleResolver",
    framework_package: str = DEFAULT_FRAMEWORK_PACKAGE,
    script_extensions: "Iterable[str]" = SCRIPT_EXTENSIONS,
) -> "str | None":
    """Decide whether a server-side module request is externalized.

    Args:
        request: The module request as written in the importing module.
        directory: Project directory resolution is rooted at.
        resolver: Module resolver capability.
        framework_package: npm name of the framework whose default pages must be compiled.
        script_extensions: Extensions of files that may be loaded directly by Node.

    Returns:
        ``"commonjs <request>"`` when the module is loaded at runtime, ``None`` to bundle it.
    """
    try:
        resolved = str(resolver(request, directory, preserve_symlinks=True))
    except ModuleResolutionError:
        logger.debug("Bundling %r: unresolvable from %s", request, directory)
        return None

    if _default_pages_pattern(framework_package).search(resolved):
        return None
    if _BUNDLER_PATTERN.search(resolved):
        return None
    if _dependency_script_pattern(tuple(script_extensions)).search(resolved):
        logger.debug("Externalizing %r (%s)", request, resolved)
        return f"commonjs {request}"
    return None


@dataclass(frozen=True)
class ExternalsPolicy:
    """Externals handler bound to one project directory.

    Calling the policy with a request returns the same value as
    :func:`classify_request`.
    """

    directory: Path
    resolver: "ModuleResolver" = field(default_factory=NodeResolver)
    framework_package: str = DEFAULT_FRAMEWORK_PACKAGE
    script_extensions: "tuple[str, ...]" = SCRIPT_EXTENSIONS

    def __call__(self, request: str) -> "str | None":
        return classify_request(
            request,
            directory=self.directory,
            resolver=self.resolver,
            framework_package=self.framework_package,
            script_extensions=self.script_extensions,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "type": "node_modules",
            "directory": str(self.directory),
            "externalize": [f"node_modules/**/*{ext}" for ext in self.script_extensions],
            "bundle": [f"node_modules/{self.framework_package}/dist/pages/**", "node_modules/webpack*/**"],
            "libraryType": "commonjs",
        }


def externals_config(
    directory: Path,
    is_server: bool,
    resolver: "ModuleResolver | None" = None,
    framework_package: str = DEFAULT_FRAMEWORK_PACKAGE,
) -> list[ExternalsPolicy]:
    """Build the externals rules for one compilation.

    Client output must be self-contained, so the client gets no rules at all.

    Args:
        directory: The project directory.
        is_server: Whether this is the server compilation.
        resolver: Module resolver. Defaults to :class:`~litestar_webpack.resolver.NodeResolver`.
        framework_package: npm name of the framework package.

    Returns:
        The externals handlers, empty for client builds.
    """
    if not is_server:
        return []
    return [
        ExternalsPolicy(
            directory=Path(directory),
            resolver=resolver or NodeResolver(),
            framework_package=framework_package,
        )
    ]


async def classify_requests(
    requests: "Iterable[str]",
    *,
    directory: Path,
    resolver: "ModuleResolver",
    framework_package: str = DEFAULT_FRAMEWORK_PACKAGE,
) -> "dict[str, str | None]":
    """Classify many requests concurrently.

    Each request resolves in a worker thread; the lookups share no state.

    Args:
        requests: Module requests to classify.
        directory: Project directory resolution is rooted at.
        resolver: Module resolver capability.
        framework_package: npm name of the framework package.

    Returns:
        Mapping of request to decision, in input order.
    """
    ordered = list(dict.fromkeys(requests))
    results: "dict[str, str | None]" = {}

    async def _classify(request: str) -> None:
        results[request] = await anyio.to_thread.run_sync(
            lambda: classify_request(
                request,
                directory=directory,
                resolver=resolver,
                framework_package=framework_package,
            )
        )

    async with anyio.create_task_group() as tg:
        for request in ordered:
            tg.start_soon(_classify, request)

    return {request: results[request] for request in ordered}
