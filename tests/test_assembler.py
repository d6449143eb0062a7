from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest
from litestar.serialization import decode_json, encode_json

from litestar_webpack.assembler import ConfigAssembler, Configuration, OverrideContext, get_base_config
from litestar_webpack.config import BuildContext, ProjectConfig
from litestar_webpack.externals import ExternalsPolicy
from tests.conftest import PageDiscoveryFixture


def assemble(
    tmp_path: Path,
    pages: PageDiscoveryFixture,
    *,
    dev: bool = False,
    is_server: bool = False,
    config: "ProjectConfig | None" = None,
) -> Configuration:
    context = BuildContext(
        directory=tmp_path,
        build_id="build-42",
        dev=dev,
        is_server=is_server,
        config=config or ProjectConfig(),
    )
    return ConfigAssembler(page_discovery=pages).assemble(context)


def test_client_production_configuration(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    configuration = assemble(tmp_path, static_pages)

    assert configuration.name == "client"
    assert configuration.mode == "production"
    assert configuration.target == "web"
    assert configuration.devtool is None
    assert configuration.context == tmp_path
    assert configuration.output.path == tmp_path / ".next"
    assert configuration.records_path == tmp_path / ".next" / "records.json"
    assert configuration.externals == ()
    assert configuration.optimization.commons is not None
    assert configuration.optimization.commons.min_chunks == 2
    assert configuration.entries() == {
        "static/commons/main.js": [str(tmp_path / "node_modules" / "next" / "dist" / "client" / "next")],
        "bundles/pages/index.js": ["./pages/index.js"],
        "bundles/pages/about.js": ["./pages/about.js"],
    }


def test_server_development_configuration(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    configuration = assemble(tmp_path, static_pages, dev=True, is_server=True)

    assert configuration.name == "server"
    assert configuration.target == "node"
    assert configuration.devtool == "cheap-module-source-map"
    assert configuration.output.path == tmp_path / ".next" / "server"
    assert configuration.output.naming.is_server is True
    assert len(configuration.externals) == 1
    assert isinstance(configuration.externals[0], ExternalsPolicy)
    assert configuration.optimization.split_chunks is None
    assert configuration.optimization.minimize is False
    assert configuration.entries() == {
        "bundles/pages/index.js": ["./pages/index.js"],
        "bundles/pages/about.js": ["./pages/about.js"],
    }


def test_page_discovery_receives_project_settings(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    assemble(tmp_path, static_pages, dev=True, config=ProjectConfig(page_extensions=["tsx", "ts", "js"]))

    (options,) = static_pages.calls  # type: ignore[attr-defined]
    assert options.pages_dir == tmp_path / "node_modules" / "next" / "dist" / "pages"
    assert options.dev is True
    assert options.is_server is False
    assert options.extension_pattern == "tsx|ts|js"


def test_commons_threshold_uses_page_count(tmp_path: Path) -> None:
    def ten_pages(directory: Path, options: Any) -> dict[str, list[str]]:
        return {f"bundles/pages/p{i}.js": [f"./pages/p{i}.js"] for i in range(10)}

    configuration = assemble(tmp_path, ten_pages)

    assert configuration.optimization.commons is not None
    assert configuration.optimization.commons.min_chunks == 5


def test_resolution_rules(tmp_path: Path, static_pages: PageDiscoveryFixture, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NODE_PATH", "/opt/a::/opt/b")

    configuration = assemble(tmp_path, static_pages)

    framework = tmp_path / "node_modules" / "next"
    assert configuration.resolve.modules == (str(framework / "node_modules"), "node_modules", "/opt/a", "/opt/b")
    assert configuration.resolve.extensions == (".js", ".jsx", ".json")
    assert configuration.resolve.alias == {"next": str(framework)}
    assert configuration.resolve_loader.modules == (
        str(framework / "node_modules"),
        "node_modules",
        str(framework / "dist" / "build" / "webpack" / "loaders"),
        "/opt/a",
        "/opt/b",
    )


def test_module_rules(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    dev_client = assemble(tmp_path, static_pages, dev=True)
    prod_client = assemble(tmp_path, static_pages)

    hot, babel = dev_client.module_rules
    assert hot.use.loader == "hot-self-accept-loader"
    assert hot.test == r"\.+(jsx|js)$"
    assert hot.include == (str(tmp_path / "pages"),)
    assert babel.use.loader == "babel-loader"
    assert babel.use.options == {"dev": True, "isServer": False}
    assert [rule.use.loader for rule in prod_client.module_rules] == ["babel-loader"]

    assert babel.matches(str(tmp_path / "components" / "nav.jsx"))
    assert not babel.matches(str(tmp_path / "node_modules" / "react" / "index.js"))
    assert not babel.matches("/elsewhere/index.js")
    assert hot.matches(str(tmp_path / "pages" / "index.jsx"))


def test_override_hook_receives_context(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    seen: list[OverrideContext] = []

    def hook(configuration: Configuration, ctx: OverrideContext) -> Configuration:
        seen.append(ctx)
        return configuration

    project = ProjectConfig(override_hook=hook)
    assemble(tmp_path, static_pages, dev=True, is_server=True, config=project)

    (ctx,) = seen
    assert ctx.directory == tmp_path
    assert ctx.dev is True
    assert ctx.is_server is True
    assert ctx.build_id == "build-42"
    assert ctx.config is project
    assert ctx.total_pages == 2
    assert ctx.default_loaders.babel.options == {"dev": True, "isServer": True}


def test_override_hook_result_replaces_configuration(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    def hook(configuration: Configuration, ctx: OverrideContext) -> Configuration:
        return replace(configuration, devtool="source-map", plugins=())

    configuration = assemble(tmp_path, static_pages, config=ProjectConfig(override_hook=hook))

    assert configuration.devtool == "source-map"
    assert configuration.plugins == ()


def test_modules_added_to_main_are_promoted(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    def hook(configuration: Configuration, ctx: OverrideContext) -> Configuration:
        original = configuration.entry

        def entry() -> dict[str, list[str]]:
            entries = {name: list(modules) for name, modules in original().items()}  # type: ignore[operator]
            entries["main.js"].extend(["./polyfills.js", "./analytics.js"])
            return entries

        return replace(configuration, entry=entry)

    configuration = assemble(tmp_path, static_pages, config=ProjectConfig(override_hook=hook))

    entries = configuration.entries()
    assert "main.js" not in entries
    assert entries["static/commons/main.js"] == [
        "./polyfills.js",
        "./analytics.js",
        str(tmp_path / "node_modules" / "next" / "dist" / "client" / "next"),
    ]
    assert configuration.entries() == entries


def test_hook_returning_mapping_entry(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    def hook(configuration: Configuration, ctx: OverrideContext) -> Configuration:
        return replace(configuration, entry={"main.js": ["A"], "static/commons/main.js": ["B"]})

    configuration = assemble(tmp_path, static_pages, config=ProjectConfig(override_hook=hook))

    assert configuration.entries() == {"static/commons/main.js": ["A", "B"]}


def test_override_hook_failure_propagates(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    failure = RuntimeError("broken hook")

    def hook(configuration: Configuration, ctx: OverrideContext) -> Configuration:
        raise failure

    with pytest.raises(RuntimeError) as exc_info:
        assemble(tmp_path, static_pages, config=ProjectConfig(override_hook=hook))

    assert exc_info.value is failure


def test_entry_is_reinvocable(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    configuration = assemble(tmp_path, static_pages, dev=True)

    first = configuration.entries()
    first["static/commons/main.js"].append("./leak.js")

    assert configuration.entries() != first
    assert configuration.entries() == configuration.entries()
    assert len(static_pages.calls) == 1  # type: ignore[attr-defined]


def test_configuration_serializes(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    for dev in (True, False):
        for is_server in (True, False):
            configuration = assemble(tmp_path, static_pages, dev=dev, is_server=is_server)
            payload = decode_json(encode_json(configuration.to_dict()))

            assert payload["name"] == ("server" if is_server else "client")
            assert payload["entry"] == configuration.entries()
            assert [p["name"] for p in payload["plugins"]] == [p.name for p in configuration.plugins]
            assert payload["output"]["libraryTarget"] == "commonjs2"
            assert payload["performance"] == {"hints": False}


def test_serialized_externals_and_custom_handlers(tmp_path: Path, static_pages: PageDiscoveryFixture) -> None:
    def no_externals(request: str) -> None:
        return None

    def hook(configuration: Configuration, ctx: OverrideContext) -> Configuration:
        return replace(configuration, externals=(*configuration.externals, no_externals))

    configuration = assemble(tmp_path, static_pages, is_server=True, config=ProjectConfig(override_hook=hook))
    externals = configuration.to_dict()["externals"]

    assert externals[0]["type"] == "node_modules"
    assert externals[1] == {"type": "function", "name": no_externals.__qualname__}


def test_get_base_config_with_default_discovery(project_dir: Path) -> None:
    configuration = get_base_config(project_dir, build_id="abc", dev=False, is_server=False)

    entries = configuration.entries()
    assert "bundles/pages/blog.js" in entries
    assert "bundles/pages/_document.js" not in entries
    assert configuration.optimization.commons is not None
    assert configuration.optimization.commons.min_chunks == 3
