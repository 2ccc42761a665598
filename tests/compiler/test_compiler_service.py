"""Tests for :mod:`vno.compiler.service`."""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from vno.compiler import (
    CompilerService,
    MalformedSectionError,
    MissingSectionError,
    UnreadableSourceError,
)
from vno.core.config import BuildSettings


def _service(project: Path, **settings) -> CompilerService:
    return CompilerService(project_root=project, settings=BuildSettings(**settings))


def test_parse_discovers_components_breadth_first(project: Path, write_component) -> None:
    write_component(
        "App.vue",
        imports=("import Nav from './Nav.vue'", "import Main from './Main.vue'"),
    )
    write_component("Nav.vue", imports=("import Link from './Link.vue'",))
    write_component("Main.vue", imports=("import Card from './Card.vue'",))
    write_component("Link.vue")
    write_component("Card.vue")

    store = _service(project).parse()

    assert [record.label for record in store.records()] == [
        "App",
        "Nav",
        "Main",
        "Link",
        "Card",
    ]
    assert store.size == len(store) == 5
    assert store.root is not None and store.root.label == "App"
    assert store.root.is_root


def test_each_record_is_fully_populated(project: Path, write_component) -> None:
    write_component(
        "App.vue",
        template="<main>\n    <Child/>\n  </main>",
        script="{ name: 'app', components: { Child } }",
        style="main { padding: 1em; }",
        imports=("import Child from './Child.vue'",),
    )
    write_component("Child.vue", template="<p>child</p>")

    store = _service(project).parse()
    app = store.get("App")
    child = store.get("Child")

    assert app is not None and child is not None
    assert app.template == "<main><Child/></main>"
    assert app.script == "name:'app',components:{Child}"
    assert app.style == "main{padding:1em;}"
    assert app.instance == (
        "\nconst App = new Vue({template: `<main><Child/></main>`,"
        "name:'app',components:{Child}})"
    )
    assert child.path == project / "Child.vue"
    assert child.instance is not None
    assert child.instance.startswith('\nconst Child = Vue.component("Child"')


def test_shared_label_is_finalized_once(project: Path, write_component) -> None:
    write_component(
        "App.vue",
        imports=(
            "import Panel from './Panel.vue'",
            "import Icon from './icons/Icon.vue'",
        ),
    )
    write_component("Panel.vue", imports=("import Icon from './shared/Icon.vue'",))
    write_component("icons/Icon.vue", template="<i>first</i>")
    write_component("shared/Icon.vue", template="<i>second</i>")

    with capture_logs() as logs:
        store = _service(project).parse()

    assert store.size == 3
    assert [record.label for record in store.records()] == ["App", "Panel", "Icon"]
    icon = store.get("Icon")
    assert icon is not None
    assert icon.path == project / "icons" / "Icon.vue"
    assert icon.template == "<i>first</i>"
    assert any(entry["event"] == "duplicate-label" for entry in logs)


def test_import_cycles_terminate(project: Path, write_component) -> None:
    write_component("App.vue", imports=("import A from './A.vue'",))
    write_component("A.vue", imports=("import B from './B.vue'",))
    write_component(
        "B.vue",
        imports=("import A from './A.vue'", "import App from './App.vue'"),
    )

    store = _service(project).parse()

    assert [record.label for record in store.records()] == ["App", "A", "B"]
    assert store.size == 3


def test_self_import_does_not_requeue(project: Path, write_component) -> None:
    write_component("App.vue", imports=("import App from './App.vue'",))

    store = _service(project).parse()

    assert store.size == 1


def test_imports_resolve_from_project_root(project: Path, write_component) -> None:
    write_component(
        "App.vue",
        imports=("import Deep from './components/deep/Deep.vue'",),
    )
    write_component(
        "components/deep/Deep.vue",
        imports=("import Leaf from './components/Leaf.vue'",),
    )
    write_component("components/Leaf.vue")

    store = _service(project).parse()

    leaf = store.get("Leaf")
    assert leaf is not None
    assert leaf.path == project / "components" / "Leaf.vue"


def test_missing_import_target_aborts(project: Path, write_component) -> None:
    write_component("App.vue", imports=("import Ghost from './Ghost.vue'",))

    with pytest.raises(UnreadableSourceError) as exc:
        _service(project).parse()

    assert exc.value.label == "Ghost"
    assert exc.value.path == project / "Ghost.vue"


def test_missing_entry_aborts(project: Path) -> None:
    with pytest.raises(UnreadableSourceError) as exc:
        _service(project).parse()

    assert exc.value.label == "App"


def test_invalid_utf8_is_unreadable(project: Path) -> None:
    (project / "App.vue").write_bytes(b"<template>\xff\xfe</template>")

    with pytest.raises(UnreadableSourceError):
        _service(project).parse()


def test_missing_section_aborts_build(project: Path, write_component) -> None:
    write_component("App.vue", imports=("import Bare from './Bare.vue'",))
    write_component("Bare.vue", style=None)

    with pytest.raises(MissingSectionError) as exc:
        _service(project).parse()

    assert exc.value.section == "style"
    assert exc.value.label == "Bare"


def test_optional_sections_allow_styleless_components(
    project: Path, write_component
) -> None:
    write_component("App.vue", style=None)

    store = _service(project, optional_sections=("style",)).parse()

    app = store.get("App")
    assert app is not None
    assert app.style is None
    assert app.instance is not None


def test_malformed_script_aborts(project: Path, write_component) -> None:
    write_component("App.vue", script="42")

    with pytest.raises(MalformedSectionError):
        _service(project).parse()


def test_custom_root_label_and_entry(project: Path, write_component) -> None:
    entry = write_component("src/Main.vue")

    store = _service(project).parse("Main", entry)

    root = store.get("Main")
    assert root is not None and root.is_root
    assert store.context.root_label == "Main"
    assert root.instance is not None
    assert root.instance.startswith("\nconst Main = new Vue(")


def test_builds_do_not_share_state(project: Path, write_component) -> None:
    write_component("App.vue", imports=("import A from './A.vue'",))
    write_component("A.vue")
    service = _service(project)

    first = service.parse()
    second = service.parse()

    assert first is not second
    assert first.size == second.size == 2
    assert first.get("A") is not second.get("A")


def test_compile_emits_dependencies_first(project: Path, write_component) -> None:
    write_component("App.vue", imports=("import Nav from './Nav.vue'",))
    write_component("Nav.vue", imports=("import Link from './Link.vue'",))
    write_component("Link.vue")

    result = _service(project).compile()

    assert result.output_path == project / "vno-build" / "build.js"
    text = result.output_path.read_text(encoding="utf-8")
    positions = [text.index(f"const {label} =") for label in ("Link", "Nav", "App")]
    assert positions == sorted(positions)
    assert result.metrics.components_compiled == 3
    assert result.metrics.components_discovered == 3
    assert result.metrics.imports_seen == 2
    assert result.metrics.bytes_written == len(text.encode("utf-8"))


def test_metrics_count_skipped_duplicates(project: Path, write_component) -> None:
    write_component(
        "App.vue",
        imports=("import A from './A.vue'", "import B from './B.vue'"),
    )
    write_component("A.vue", imports=("import B from './B.vue'",))
    write_component("B.vue", imports=("import A from './A.vue'",))

    service = _service(project)
    service.parse()

    assert service.metrics.imports_seen == 4
    assert service.metrics.duplicates_skipped == 2
    assert service.metrics.components_compiled == 3


def test_failed_parse_writes_nothing(project: Path, write_component) -> None:
    write_component("App.vue", imports=("import Ghost from './Ghost.vue'",))

    with pytest.raises(UnreadableSourceError):
        _service(project).compile()

    assert not (project / "vno-build").exists()


def test_bytes_written_reports_only_the_current_build(
    project: Path, write_component
) -> None:
    write_component("App.vue", imports=("import Nav from './Nav.vue'",))
    write_component("Nav.vue")
    service = _service(project)

    first = service.compile()
    second = service.compile()

    size = second.output_path.stat().st_size
    assert first.metrics.bytes_written == second.metrics.bytes_written
    assert second.metrics.bytes_written * 2 == size


def test_context_carries_root_and_project_root(
    project: Path, write_component
) -> None:
    entry = write_component("src/Main.vue", imports=("import Nav from './Nav.vue'",))
    write_component("Nav.vue")

    with capture_logs() as logs:
        store = _service(project, runtime="Petite").parse("Main", entry)

    assert store.context.project_root == project.resolve()
    assert store.context.runtime == "Petite"
    assert store.get("Nav").path == project.resolve() / "Nav.vue"
    compiled = [entry for entry in logs if entry["event"] == "component-compiled"]
    assert {entry["root"] for entry in compiled} == {"Main"}
