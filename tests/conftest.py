import importlib
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import TYPE_CHECKING, cast

import pytest
from click.testing import CliRunner

from litestar_webpack.pages import PageDiscoveryOptions

if TYPE_CHECKING:
    from litestar.cli._utils import LitestarGroup

here = Path(__file__).parent

# Environment variables that may affect test behavior - clear before each test
_WEBPACK_ENV_VARS = [
    "NODE_PATH",
    "ASSET_URL",
    "LITESTAR_WEBPACK_DEV_MODE",
    "LITESTAR_WEBPACK_BUILD_ID",
    "LITESTAR_WEBPACK_LOG_LEVEL",
    "LITESTAR_APP",
]

PageDiscoveryFixture = Callable[[Path, PageDiscoveryOptions], "dict[str, list[str]]"]
CreateAppFileFixture = Callable[[str, str], Path]


@pytest.fixture(autouse=True)
def clean_webpack_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear Webpack-related environment variables before each test for isolation."""
    for var in _WEBPACK_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with a few pages and the framework's default pages installed."""
    for page in ("index.js", "about.jsx", "blog/index.js", "blog/[slug].js", "_document.js", "_app.js"):
        write_file(tmp_path / "pages" / page, "export default () => null\n")
    write_file(tmp_path / "pages" / "README.md", "not a page\n")
    framework = tmp_path / "node_modules" / "next"
    write_file(framework / "package.json", '{"name": "next", "main": "dist/server/next.js"}')
    for page in ("_app.js", "_error.js", "_document.js"):
        write_file(framework / "dist" / "pages" / page)
    return tmp_path


@pytest.fixture
def static_pages() -> PageDiscoveryFixture:
    """Page discovery returning two fixed pages and recording its calls."""
    calls: list[PageDiscoveryOptions] = []

    def discover(directory: Path, options: PageDiscoveryOptions) -> dict[str, list[str]]:
        calls.append(options)
        return {
            "bundles/pages/index.js": ["./pages/index.js"],
            "bundles/pages/about.js": ["./pages/about.js"],
        }

    discover.calls = calls  # type: ignore[attr-defined]
    return discover


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def root_command() -> "LitestarGroup":
    """A fresh ``litestar`` root group, so plugin commands never leak between tests."""
    import litestar.cli.main

    return cast("LitestarGroup", importlib.reload(litestar.cli.main).litestar_group)


@pytest.fixture
def create_app_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[CreateAppFileFixture, None, None]:
    """Write an importable application module into the working directory."""
    created: list[str] = []
    monkeypatch.chdir(tmp_path)
    monkeypatch.syspath_prepend(str(tmp_path))

    def _create(name: str, content: str) -> Path:
        path = write_file(tmp_path / f"{name}.py", content)
        created.append(name)
        importlib.invalidate_caches()
        return path

    yield _create
    for name in created:
        sys.modules.pop(name, None)
