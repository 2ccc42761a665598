"""Compiler module service surface."""

from __future__ import annotations

from .emitter import Emitter
from .errors import (
    CompilerError,
    MalformedImportError,
    MalformedSectionError,
    MissingSectionError,
    OutputWriteError,
    UnreadableSourceError,
)
from .imports import ImportDeclaration, locate, resolve_imports, scan_imports
from .instance import render_instance
from .models import (
    BuildMetrics,
    CompileContext,
    ComponentRecord,
    ComponentSections,
    InstanceKind,
)
from .sections import (
    extract_script,
    extract_sections,
    extract_style,
    extract_template,
)
from .service import BuildResult, CompilerService, read_source
from .store import ComponentStore
from .worklist import Worklist

__all__ = [
    "BuildMetrics",
    "BuildResult",
    "CompileContext",
    "CompilerError",
    "CompilerService",
    "ComponentRecord",
    "ComponentSections",
    "ComponentStore",
    "Emitter",
    "ImportDeclaration",
    "InstanceKind",
    "MalformedImportError",
    "MalformedSectionError",
    "MissingSectionError",
    "OutputWriteError",
    "UnreadableSourceError",
    "Worklist",
    "extract_script",
    "extract_sections",
    "extract_style",
    "extract_template",
    "locate",
    "read_source",
    "render_instance",
    "resolve_imports",
    "scan_imports",
]
