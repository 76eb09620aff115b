"""Writers for generated JavaScript artifacts."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jsbeautifier

GENERATED_HEADER = "// This file was generated using Selenium IDE\n"
TEST_FILE_SUFFIX = ".test.js"
COMMONS_MODULE = "commons"
MANIFEST_FILENAME = "package.json"

RUNNER_TEST_ENVIRONMENT = "jest-environment-selenium"
RUNNER_SETUP_SCRIPT = "jest-environment-selenium/dist/setup.js"


def beautify_source(source: str) -> str:
    """Pretty-print JavaScript with a two space indent."""
    options = jsbeautifier.default_options()
    options.indent_size = 2
    return jsbeautifier.beautify(source, options)


def write_js_file(path_without_suffix: Path, source: str, suffix: str = TEST_FILE_SUFFIX) -> Path:
    destination = path_without_suffix.with_name(path_without_suffix.name + suffix)
    destination.write_text(beautify_source(source), encoding="utf-8")
    return destination


def build_manifest(
    project_name: str,
    dependencies: Mapping[str, str],
    runner_options: Mapping[str, Any],
    base_path: Path,
) -> dict[str, Any]:
    """Describe the sandbox package and the runner configuration it needs."""
    return {
        "name": project_name,
        "version": "0.0.0",
        "jest": {
            "modulePaths": [str(base_path / "node_modules")],
            "setupTestFrameworkScriptFile": RUNNER_SETUP_SCRIPT,
            "testEnvironment": RUNNER_TEST_ENVIRONMENT,
            "testEnvironmentOptions": dict(runner_options),
        },
        "dependencies": dict(dependencies),
    }


def write_manifest(sandbox_path: Path, manifest: Mapping[str, Any]) -> Path:
    destination = sandbox_path / MANIFEST_FILENAME
    destination.write_text(json.dumps(manifest), encoding="utf-8")
    return destination
