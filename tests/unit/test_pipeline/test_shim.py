"""Tests for dispatcher linkage injection."""

from pathlib import Path

import pytest

from wasmdist.core.exceptions.errors import OutputIOError
from wasmdist.models.build import BuildMode, PipelineConfig
from wasmdist.pipeline.shim import (
    IMPORT_LINKAGE,
    REQUIRE_LINKAGE,
    entry_filename,
    inject_shims,
    linkage_statement,
    prepend_linkage,
    shim_targets,
)


class TestLinkage:
    """Tests for the pure linkage helpers."""

    def test_linkage_strings(self) -> None:
        """Exact statements per mode."""
        assert linkage_statement(BuildMode.TEST) == 'const {updateDispatcher} = require("react");\n'
        assert linkage_statement(BuildMode.PRODUCTION) == 'import {updateDispatcher} from "react";\n'

    @pytest.mark.parametrize("mode", list(BuildMode))
    def test_prepend_text(self, mode: BuildMode) -> None:
        """The original text follows the linkage unchanged."""
        original = "let wasm;\r\nexport function render() {}\né"
        assert prepend_linkage(original, mode) == linkage_statement(mode) + original

    def test_prepend_bytes(self) -> None:
        """Bytes in, bytes out, including non-UTF-8 content."""
        original = b"\x00\xffbinary-ish\n"
        result = prepend_linkage(original, BuildMode.PRODUCTION)

        assert isinstance(result, bytes)
        assert result == IMPORT_LINKAGE.encode("utf-8") + original

    def test_prepend_empty(self) -> None:
        """Empty content becomes just the linkage."""
        assert prepend_linkage("", BuildMode.TEST) == REQUIRE_LINKAGE

    def test_prepend_twice_doubles(self) -> None:
        """Prepending is not idempotent."""
        once = prepend_linkage("body", BuildMode.TEST)
        twice = prepend_linkage(once, BuildMode.TEST)
        assert twice == REQUIRE_LINKAGE * 2 + "body"

    def test_entry_filename(self) -> None:
        """TEST patches index.js, PRODUCTION patches index_bg.js."""
        assert entry_filename(BuildMode.TEST) == "index.js"
        assert entry_filename(BuildMode.PRODUCTION) == "index_bg.js"

    def test_shim_targets(self) -> None:
        """react-noop is only linked in TEST."""
        assert shim_targets(BuildMode.TEST) == ["react-noop", "react-dom"]
        assert shim_targets(BuildMode.PRODUCTION) == ["react-dom"]


class TestInjectShims:
    """Tests for inject_shims."""

    def _write(self, config: PipelineConfig, package: str, name: str, content: bytes) -> Path:
        path = config.package_output(package) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    def test_production(self, production_config: PipelineConfig) -> None:
        """Only react-dom's index_bg.js is patched with the import form."""
        dom = self._write(production_config, "react-dom", "index_bg.js", b"export function f() {}\n")
        dom_index = self._write(production_config, "react-dom", "index.js", b"import * as m;\n")

        patched = inject_shims(production_config)

        assert patched == [dom]
        assert dom.read_bytes() == IMPORT_LINKAGE.encode() + b"export function f() {}\n"
        assert dom_index.read_bytes() == b"import * as m;\n"

    def test_test_mode(self, node_config: PipelineConfig) -> None:
        """react-noop then react-dom index.js get the require form."""
        noop = self._write(node_config, "react-noop", "index.js", b"module.exports = {};\n")
        dom = self._write(node_config, "react-dom", "index.js", b"let imports = {};\n")

        patched = inject_shims(node_config)

        assert patched == [noop, dom]
        assert noop.read_bytes() == REQUIRE_LINKAGE.encode() + b"module.exports = {};\n"
        assert dom.read_bytes() == REQUIRE_LINKAGE.encode() + b"let imports = {};\n"

    def test_missing_entry_file(self, production_config: PipelineConfig) -> None:
        """A missing entry file raises OutputIOError."""
        with pytest.raises(OutputIOError, match="Failed to read generated file"):
            inject_shims(production_config)

    def test_stops_at_first_missing(self, node_config: PipelineConfig) -> None:
        """react-dom is untouched when react-noop's entry is missing."""
        dom = self._write(node_config, "react-dom", "index.js", b"original")

        with pytest.raises(OutputIOError):
            inject_shims(node_config)

        assert dom.read_bytes() == b"original"
