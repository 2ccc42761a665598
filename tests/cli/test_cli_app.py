"""Integration tests for the Typer application exposed by :mod:`vno.cli`."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from vno.cli import create_app
from vno.cli.build import build_cli_overrides, load_project_config


@pytest.fixture()
def runner() -> CliRunner:
    """Return a Typer CLI runner for invoking the application."""

    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for variable in ("VNO_LOG_LEVEL", "VNO_OUTPUT_DIR", "VNO_ROOT_LABEL"):
        monkeypatch.delenv(variable, raising=False)


def _seed_project(write_component) -> None:
    write_component("App.vue", imports=("import Nav from './Nav.vue'",))
    write_component("Nav.vue")


def test_build_compiles_project_and_prints_summary(
    runner: CliRunner, project: Path, write_component
) -> None:
    _seed_project(write_component)

    result = runner.invoke(
        create_app(),
        ["build", "--root", str(project), "--log-level", "warning"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    assert "Build complete" in result.output
    assert "components: 2" in result.output
    bundle = project / "vno-build" / "build.js"
    text = bundle.read_text(encoding="utf-8")
    assert text.index("const Nav =") < text.index("const App =")
    assert (project / ".vno" / "logs").is_dir()


def test_build_cleans_output_by_default(
    runner: CliRunner, project: Path, write_component
) -> None:
    _seed_project(write_component)
    app = create_app()
    args = ["build", "--root", str(project), "-l", "warning"]

    runner.invoke(app, args, catch_exceptions=False)
    result = runner.invoke(app, args, catch_exceptions=False)

    assert result.exit_code == 0, result.output
    text = (project / "vno-build" / "build.js").read_text(encoding="utf-8")
    assert text.count("const App =") == 1


def test_build_no_clean_appends_to_existing_bundle(
    runner: CliRunner, project: Path, write_component
) -> None:
    _seed_project(write_component)
    app = create_app()
    args = ["build", "--root", str(project), "--no-clean", "-l", "warning"]

    runner.invoke(app, args, catch_exceptions=False)
    runner.invoke(app, args, catch_exceptions=False)

    text = (project / "vno-build" / "build.js").read_text(encoding="utf-8")
    assert text.count("const App =") == 2


def test_build_accepts_entry_label_and_output_options(
    runner: CliRunner, project: Path, write_component
) -> None:
    write_component("src/Main.vue")

    result = runner.invoke(
        create_app(),
        [
            "build",
            "src/Main.vue",
            "--root",
            str(project),
            "--label",
            "Main",
            "--out",
            "dist",
            "--file",
            "main.js",
            "--runtime",
            "Petite",
            "-l",
            "warning",
        ],
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    text = (project / "dist" / "main.js").read_text(encoding="utf-8")
    assert text.startswith("\nconst Main = new Petite(")


def test_build_reads_project_config(
    runner: CliRunner, project: Path, write_component
) -> None:
    write_component("Root.vue", style=None)
    (project / "vno.toml").write_text(
        '[build]\nroot_label = "Root"\nentry = "Root.vue"\n'
        'optional_sections = ["style"]\n',
        encoding="utf-8",
    )

    result = runner.invoke(
        create_app(),
        ["build", "--root", str(project), "-l", "warning"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    assert "Root: root" in result.output


def test_build_failure_exits_with_error(
    runner: CliRunner, project: Path, write_component
) -> None:
    write_component("App.vue", imports=("import Ghost from './Ghost.vue'",))

    result = runner.invoke(
        create_app(),
        ["build", "--root", str(project), "-l", "warning"],
    )

    assert result.exit_code == 1
    assert "Build failed" in result.output
    assert "Ghost" in result.output


def test_build_rejects_invalid_config(
    runner: CliRunner, project: Path
) -> None:
    (project / "vno.toml").write_text(
        '[build]\noptional_sections = ["footer"]\n',
        encoding="utf-8",
    )

    result = runner.invoke(create_app(), ["build", "--root", str(project)])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


@pytest.mark.parametrize("out", ["..", "../..", "/"])
def test_build_refuses_output_outside_project(
    runner: CliRunner, tmp_path: Path, out: str
) -> None:
    work = tmp_path / "work"
    project = work / "project"
    project.mkdir(parents=True)
    (work / "precious.txt").write_text("keep", encoding="utf-8")
    (project / "App.vue").write_text(
        "<template><p>x</p></template>\n<script>export default {name:'app'}</script>\n"
        "<style>p{}</style>\n",
        encoding="utf-8",
    )

    result = runner.invoke(
        create_app(),
        ["build", "--root", str(project), "--out", out, "-l", "warning"],
    )

    assert result.exit_code == 1
    assert "Configuration error" in result.output
    assert (work / "precious.txt").exists()
    assert (project / "App.vue").exists()


def test_init_writes_config_and_refuses_overwrite(
    runner: CliRunner, project: Path
) -> None:
    app = create_app()

    first = runner.invoke(
        app,
        ["init", "--root", str(project), "--label", "Main", "--entry", "Main.vue"],
        catch_exceptions=False,
    )
    second = runner.invoke(app, ["init", "--root", str(project)])
    forced = runner.invoke(app, ["init", "--root", str(project), "--force"])

    assert first.exit_code == 0, first.output
    assert "Project initialized" in first.output
    assert second.exit_code == 1
    assert "already exists" in second.output
    assert forced.exit_code == 0

    rendered = tomllib.loads((project / "vno.toml").read_text(encoding="utf-8"))
    assert rendered["build"]["root_label"] == "App"


def test_build_cli_overrides_skip_unset_values() -> None:
    assert build_cli_overrides() == {}
    assert build_cli_overrides(log_level="debug", output_dir="dist") == {
        "log_level": "debug",
        "build": {"output_dir": "dist"},
    }


def test_load_project_config_honors_environment(project: Path) -> None:
    config = load_project_config(
        root=project,
        environ={"VNO_OUTPUT_DIR": "public"},
        cli_overrides={"build": {"runtime": "Petite"}},
    )

    assert config.build.output_dir == "public"
    assert config.build.runtime == "Petite"
