"""Distribution build pipeline.

This module provides:
- Output workspace reset
- Package builds through wasm-pack
- Post-build patches (manifest, dispatcher linkage, Fragment export)
"""

from wasmdist.pipeline.builder import (
    PackageBuilder,
    WasmPackBuilder,
    default_build_specs,
    plan_builds,
    run_builds,
)
from wasmdist.pipeline.exports import (
    append_export,
    append_export_declaration,
    augment_exports,
)
from wasmdist.pipeline.manifest import (
    JSX_RUNTIME_FILES,
    append_manifest_files,
    patch_manifest,
)
from wasmdist.pipeline.orchestrator import BuildPipeline, build_distribution
from wasmdist.pipeline.shim import (
    entry_filename,
    inject_shims,
    linkage_statement,
    prepend_linkage,
    shim_targets,
)
from wasmdist.pipeline.workspace import OutputWorkspace

__all__ = [
    "OutputWorkspace",
    "PackageBuilder",
    "WasmPackBuilder",
    "default_build_specs",
    "plan_builds",
    "run_builds",
    "JSX_RUNTIME_FILES",
    "append_manifest_files",
    "patch_manifest",
    "linkage_statement",
    "prepend_linkage",
    "entry_filename",
    "shim_targets",
    "inject_shims",
    "append_export",
    "append_export_declaration",
    "augment_exports",
    "BuildPipeline",
    "build_distribution",
]
