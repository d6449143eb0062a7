"""Metadata for the Project."""

from importlib.metadata import PackageNotFoundError, metadata, version

__all__ = ("__project__", "__version__")

try:
    __version__ = version("litestar_webpack")
    """Version of the project."""
    __project__ = metadata("litestar_webpack")["Name"]
    """Name of the project."""
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
    __project__ = "Litestar Webpack"
finally:
    del version, PackageNotFoundError, metadata
