"""Shared pytest fixtures for compiler tests."""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


def component_source(
    *,
    template: str = "<div></div>",
    script: str = "{ name: 'x' }",
    style: str | None = "div { color: red; }",
    imports: tuple[str, ...] = (),
) -> str:
    """Return a component file body with the given sections."""

    lines = [f"<template>\n  {template}\n</template>", "<script>"]
    lines.extend(imports)
    lines.append(f"export default {script}")
    lines.append("</script>")
    if style is not None:
        lines.append(f"<style>\n  {style}\n</style>")
    return "\n".join(lines) + "\n"


ComponentWriter = Callable[..., Path]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return an empty project root under ``tmp_path``."""

    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_component(project: Path) -> ComponentWriter:
    """Write a component file relative to ``project`` and return its path."""

    def _write(relative: str, text: str | None = None, **sections) -> Path:
        path = project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        body = text if text is not None else component_source(**sections)
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_logging_state() -> Iterator[None]:
    """Ensure each test runs with a clean root logger."""

    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
