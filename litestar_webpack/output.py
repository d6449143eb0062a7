"""Output file naming."""

import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from litestar_webpack.config._constants import (
    CLIENT_STATIC_FILES_PATH,
    CLIENT_STATIC_FILES_RUNTIME_MAIN,
    CLIENT_STATIC_FILES_RUNTIME_WEBPACK,
)

__all__ = ("HASHED_CHUNK_NAMES", "ChunkDescriptor", "OutputConfig", "OutputNamingPolicy")

HASHED_CHUNK_NAMES = frozenset({CLIENT_STATIC_FILES_RUNTIME_MAIN, CLIENT_STATIC_FILES_RUNTIME_WEBPACK})
"""Infrastructure chunks whose production file names carry the content hash."""

HOT_UPDATE_CHUNK_FILENAME = f"{CLIENT_STATIC_FILES_PATH}/webpack/[id].[hash].hot-update.js"
HOT_UPDATE_MAIN_FILENAME = f"{CLIENT_STATIC_FILES_PATH}/webpack/[hash].hot-update.json"


@dataclass(frozen=True)
class ChunkDescriptor:
    """A chunk as reported by the bundler when naming its output."""

    name: str
    content_hash: str


@dataclass(frozen=True)
class OutputNamingPolicy:
    """Compute emitted file names for entry, split and hot-update chunks.

    Page chunks keep their name so manifest lookups stay stable; only the two
    infrastructure chunks get the content hash in production.
    """

    dev: bool
    is_server: bool

    def filename(self, chunk: ChunkDescriptor) -> str:
        """File name of an entry chunk.

        Args:
            chunk: The chunk being emitted.

        Returns:
            ``<name>-<hash><ext>`` for infrastructure chunks in production, the chunk name otherwise.
        """
        if not self.dev and chunk.name in HASHED_CHUNK_NAMES:
            stem, ext = posixpath.splitext(chunk.name)
            return f"{stem}-{chunk.content_hash}{ext}"
        return chunk.name

    __call__ = filename

    def chunk_filename(self, chunk: ChunkDescriptor) -> str:
        """File name of a dynamically imported chunk."""
        stem = chunk.name if self.dev else chunk.content_hash
        if self.is_server:
            return f"{stem}.js"
        return f"{CLIENT_STATIC_FILES_PATH}/chunks/{stem}.js"

    @property
    def chunk_filename_template(self) -> str:
        stem = "[name]" if self.dev else "[chunkhash]"
        return f"{stem}.js" if self.is_server else f"{CLIENT_STATIC_FILES_PATH}/chunks/{stem}.js"

    @staticmethod
    def hot_update_chunk_filename(chunk_id: str, build_hash: str) -> str:
        return HOT_UPDATE_CHUNK_FILENAME.replace("[id]", chunk_id).replace("[hash]", build_hash)

    @staticmethod
    def hot_update_main_filename(build_hash: str) -> str:
        return HOT_UPDATE_MAIN_FILENAME.replace("[hash]", build_hash)


@dataclass(frozen=True)
class OutputConfig:
    """Output rules of one compilation.

    Attributes:
        path: Directory the compilation writes to.
        naming: File naming policy for emitted chunks.
        library_target: Module format of the emitted entry chunks.
        hot_update_chunk_filename: Template for hot-update chunk artifacts.
        hot_update_main_filename: Template for the hot-update manifest.
        strict_module_exception_handling: Keep failed modules out of the module cache.
    """

    path: Path
    naming: OutputNamingPolicy
    library_target: str = "commonjs2"
    hot_update_chunk_filename: str = HOT_UPDATE_CHUNK_FILENAME
    hot_update_main_filename: str = HOT_UPDATE_MAIN_FILENAME
    strict_module_exception_handling: bool = field(default=True)

    def filename(self, chunk: ChunkDescriptor) -> str:
        return self.naming.filename(chunk)

    def chunk_filename(self, chunk: ChunkDescriptor) -> str:
        return self.naming.chunk_filename(chunk)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "filename": "[name]",
            "hashedFilenames": {}
            if self.naming.dev
            else {name: self.filename(ChunkDescriptor(name, "[chunkhash]")) for name in sorted(HASHED_CHUNK_NAMES)},
            "libraryTarget": self.library_target,
            "hotUpdateChunkFilename": self.hot_update_chunk_filename,
            "hotUpdateMainFilename": self.hot_update_main_filename,
            "chunkFilename": self.naming.chunk_filename_template,
            "strictModuleExceptionHandling": self.strict_module_exception_handling,
        }
