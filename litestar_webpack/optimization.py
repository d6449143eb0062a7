"""Chunk splitting and minification policy."""

import math
from dataclasses import dataclass, field
from typing import Any, Literal

from litestar_webpack.config._constants import CLIENT_STATIC_FILES_RUNTIME_WEBPACK, COMMONS_CHUNK_NAME

__all__ = (
    "CacheGroup",
    "OptimizationConfig",
    "SplitChunksConfig",
    "commons_threshold",
    "optimization_config",
)


def commons_threshold(total_pages: int) -> int:
    """Minimum number of page chunks a module must appear in to join the commons chunk.

    Half of the pages, rounded up, once there are more than two pages; never below two.

    Args:
        total_pages: Number of page entries in the build.

    Returns:
        The ``minChunks`` value of the commons cache group.
    """
    return math.ceil(total_pages * 0.5) if total_pages > 2 else 2


@dataclass(frozen=True)
class CacheGroup:
    name: str
    min_chunks: int
    chunks: "Literal['all', 'async', 'initial']" = "all"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "chunks": self.chunks, "minChunks": self.min_chunks}


@dataclass(frozen=True)
class SplitChunksConfig:
    """Cross-page extraction rules.

    The bundler's built-in ``default`` and ``vendors`` groups are always disabled;
    only the groups listed in ``cache_groups`` apply.
    """

    cache_groups: "tuple[CacheGroup, ...]" = ()
    chunks: "Literal['all', 'async', 'initial']" = "all"

    def to_dict(self) -> dict[str, Any]:
        groups: dict[str, Any] = {"default": False, "vendors": False}
        groups.update({group.name: group.to_dict() for group in self.cache_groups})
        return {"chunks": self.chunks, "cacheGroups": groups}


@dataclass(frozen=True)
class OptimizationConfig:
    """Optimization rules of one compilation.

    Attributes:
        split_chunks: Cross-page extraction rules, ``None`` when splitting is disabled.
        minimize: Minify the emitted code.
        runtime_chunk: Name of the chunk holding the module-loading runtime, if isolated.
    """

    split_chunks: "SplitChunksConfig | None" = None
    minimize: bool = False
    runtime_chunk: "str | None" = field(default=None)

    @property
    def commons(self) -> "CacheGroup | None":
        if self.split_chunks is None:
            return None
        return next((g for g in self.split_chunks.cache_groups if g.name == COMMONS_CHUNK_NAME), None)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "splitChunks": self.split_chunks.to_dict() if self.split_chunks else False,
            "minimize": self.minimize,
        }
        if self.runtime_chunk is not None:
            payload["runtimeChunk"] = {"name": self.runtime_chunk}
        return payload


def optimization_config(*, dev: bool, is_server: bool, total_pages: int) -> OptimizationConfig:
    """Decide the optimization rules for a compilation.

    Args:
        dev: Development build.
        is_server: Server compilation.
        total_pages: Number of page entries.

    Returns:
        The optimization rules.
    """
    if is_server:
        return OptimizationConfig(split_chunks=None, minimize=False, runtime_chunk=None)

    config = OptimizationConfig(split_chunks=None, minimize=not dev, runtime_chunk=CLIENT_STATIC_FILES_RUNTIME_WEBPACK)
    if dev:
        return config

    commons = CacheGroup(name=COMMONS_CHUNK_NAME, min_chunks=commons_threshold(total_pages))
    return OptimizationConfig(
        split_chunks=SplitChunksConfig(cache_groups=(commons,)),
        minimize=config.minimize,
        runtime_chunk=config.runtime_chunk,
    )
