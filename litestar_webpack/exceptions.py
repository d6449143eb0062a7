"""Litestar-Webpack exception classes."""

__all__ = [
    "LitestarWebpackError",
    "ModuleResolutionError",
    "PageDiscoveryError",
]


class LitestarWebpackError(Exception):
    """Base exception for Litestar-Webpack related errors."""


class ModuleResolutionError(LitestarWebpackError):
    """Raised when a module request cannot be resolved to a file."""

    def __init__(self, request: str, basedir: str, reason: "str | None" = None) -> None:
        """Initialize the exception.

        Args:
            request: The module request that failed to resolve.
            basedir: The directory resolution started from.
            reason: Optional detail about why resolution failed.
        """
        message = f"Cannot find module {request!r} from {basedir!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.request = request
        self.basedir = basedir


class PageDiscoveryError(LitestarWebpackError):
    """Raised when the pages directory cannot be scanned."""

    def __init__(self, pages_dir: str, reason: str) -> None:
        super().__init__(f"Unable to discover pages in {pages_dir!r}: {reason}")
