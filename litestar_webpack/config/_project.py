"""Project configuration."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from litestar.exceptions import ImproperlyConfiguredException

from litestar_webpack.config._constants import DEFAULT_DIST_DIR, DEFAULT_PAGE_EXTENSIONS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from litestar_webpack.assembler import OverrideHook

__all__ = ("ProjectConfig",)


@dataclass(frozen=True)
class ProjectConfig:
    """Settings a project supplies to the configuration assembler.

    Attributes:
        dist_dir: Output directory, relative to the project directory.
        page_extensions: File extensions (without the leading dot) that mark page modules.
            Order matters; it is kept in the generated extension pattern.
        override_hook: Optional callable receiving the assembled configuration and an
            :class:`~litestar_webpack.assembler.OverrideContext`. Its return value
            replaces the configuration.
    """

    dist_dir: "str | Path" = DEFAULT_DIST_DIR
    page_extensions: "Sequence[str]" = field(default_factory=lambda: DEFAULT_PAGE_EXTENSIONS)
    override_hook: "OverrideHook | None" = None

    def __post_init__(self) -> None:
        """Normalize and validate the project settings.

        Raises:
            ImproperlyConfiguredException: If ``dist_dir`` is absolute, ``page_extensions``
                is empty or carries a leading dot, or ``override_hook`` is not callable.
        """
        if isinstance(self.dist_dir, str):
            object.__setattr__(self, "dist_dir", Path(self.dist_dir))
        if isinstance(self.page_extensions, str):
            object.__setattr__(self, "page_extensions", (self.page_extensions,))
        else:
            object.__setattr__(self, "page_extensions", tuple(self.page_extensions))

        if Path(self.dist_dir).is_absolute():
            msg = f"dist_dir must be relative to the project directory, got {self.dist_dir!s}"
            raise ImproperlyConfiguredException(msg)
        if not self.page_extensions:
            msg = "page_extensions must contain at least one extension"
            raise ImproperlyConfiguredException(msg)
        if any(not ext or ext.startswith(".") for ext in self.page_extensions):
            msg = f"page_extensions must not be empty or start with a dot, got {list(self.page_extensions)!r}"
            raise ImproperlyConfiguredException(msg)
        if self.override_hook is not None and not callable(self.override_hook):
            msg = "override_hook must be callable"
            raise ImproperlyConfiguredException(msg)

    @property
    def extension_pattern(self) -> str:
        """Alternation of the page extensions, e.g. ``jsx|js``."""
        return "|".join(self.page_extensions)
