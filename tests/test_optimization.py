import pytest

from litestar_webpack.optimization import commons_threshold, optimization_config


@pytest.mark.parametrize(
    ("total_pages", "expected"), [(0, 2), (1, 2), (2, 2), (3, 2), (4, 2), (5, 3), (10, 5), (11, 6)]
)
def test_commons_threshold(total_pages: int, expected: int) -> None:
    assert commons_threshold(total_pages) == expected


@pytest.mark.parametrize("dev", [True, False])
def test_server_disables_splitting_and_minification(dev: bool) -> None:
    config = optimization_config(dev=dev, is_server=True, total_pages=20)

    assert config.split_chunks is None
    assert config.minimize is False
    assert config.runtime_chunk is None
    assert config.to_dict() == {"splitChunks": False, "minimize": False}


@pytest.mark.parametrize("dev", [True, False])
def test_client_always_isolates_runtime_chunk(dev: bool) -> None:
    config = optimization_config(dev=dev, is_server=False, total_pages=3)

    assert config.runtime_chunk == "static/commons/runtime.js"
    assert config.to_dict()["runtimeChunk"] == {"name": "static/commons/runtime.js"}


def test_client_dev_has_no_commons_chunk() -> None:
    config = optimization_config(dev=True, is_server=False, total_pages=10)

    assert config.split_chunks is None
    assert config.commons is None
    assert config.minimize is False


def test_client_production_commons_chunk() -> None:
    config = optimization_config(dev=False, is_server=False, total_pages=10)

    assert config.minimize is True
    assert config.commons is not None
    assert config.commons.min_chunks == 5
    assert config.to_dict()["splitChunks"] == {
        "chunks": "all",
        "cacheGroups": {
            "default": False,
            "vendors": False,
            "commons": {"name": "commons", "chunks": "all", "minChunks": 5},
        },
    }


def test_client_production_small_site_threshold() -> None:
    config = optimization_config(dev=False, is_server=False, total_pages=1)

    assert config.commons is not None
    assert config.commons.min_chunks == 2
