"""Constants shared by the configuration and policy modules."""

__all__ = (
    "BUILD_MANIFEST",
    "BUNDLES_DIR",
    "CLIENT_STATIC_FILES_PATH",
    "CLIENT_STATIC_FILES_RUNTIME_MAIN",
    "CLIENT_STATIC_FILES_RUNTIME_WEBPACK",
    "COMMONS_CHUNK_NAME",
    "DEFAULT_BUILD_ID",
    "DEFAULT_DIST_DIR",
    "DEFAULT_FRAMEWORK_PACKAGE",
    "DEFAULT_PAGE_EXTENSIONS",
    "LEGACY_MAIN_ENTRY",
    "PAGES_DIR",
    "PAGES_MANIFEST",
    "REACT_LOADABLE_MANIFEST",
    "RECORDS_FILE",
    "SERVER_DIRECTORY",
    "TRUE_VALUES",
)

TRUE_VALUES = {"True", "true", "1", "yes", "Y", "T"}

DEFAULT_DIST_DIR = ".next"
DEFAULT_PAGE_EXTENSIONS = ("jsx", "js")
DEFAULT_FRAMEWORK_PACKAGE = "next"
DEFAULT_BUILD_ID = "development"

SERVER_DIRECTORY = "server"
PAGES_DIR = "pages"
BUNDLES_DIR = "bundles"
RECORDS_FILE = "records.json"

CLIENT_STATIC_FILES_PATH = "static"
CLIENT_STATIC_FILES_RUNTIME_MAIN = "static/commons/main.js"
"""Entry chunk holding the client runtime bootstrap."""
CLIENT_STATIC_FILES_RUNTIME_WEBPACK = "static/commons/runtime.js"
"""Chunk holding the bundler's module-loading runtime."""
LEGACY_MAIN_ENTRY = "main.js"
"""Entry key kept for projects that still push modules into ``main.js``."""
COMMONS_CHUNK_NAME = "commons"

BUILD_MANIFEST = "build-manifest.json"
PAGES_MANIFEST = "pages-manifest.json"
REACT_LOADABLE_MANIFEST = "react-loadable-manifest.json"
