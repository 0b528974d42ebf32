import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from bundleplan.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_describe_json_from_node_env(runner: CliRunner, project_root: Path):
    result = runner.invoke(
        main,
        ["--project-root", str(project_root), "describe"],
        env={"NODE_ENV": "development"},
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["mode"] == "development"
    assert payload["output"]["filename"] == "[name].js"


def test_describe_defaults_to_production(runner: CliRunner, project_root: Path):
    result = runner.invoke(main, ["--project-root", str(project_root), "describe"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["mode"] == "production"


def test_describe_mode_flag_wins(runner: CliRunner, project_root: Path):
    result = runner.invoke(
        main,
        ["--project-root", str(project_root), "describe", "--mode", "production"],
        env={"NODE_ENV": "development"},
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["mode"] == "production"


def test_describe_writes_config_module(
    runner: CliRunner, project_root: Path, tmp_path: Path
):
    output = tmp_path / "out" / "webpack.config.js"
    result = runner.invoke(
        main,
        [
            "--project-root",
            str(project_root),
            "describe",
            "--mode",
            "development",
            "--format",
            "js",
            "--output",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    contents = output.read_text()
    assert "module.exports = {" in contents
    assert "new MiniCssExtractPlugin(" in contents


def test_describe_fails_on_missing_template(runner: CliRunner, project_root: Path):
    (project_root / "src" / "index.html").unlink()

    result = runner.invoke(main, ["--project-root", str(project_root), "describe"])

    assert result.exit_code == 1
    assert "devServer" not in result.output


def test_describe_no_check_skips_verification(runner: CliRunner, project_root: Path):
    (project_root / "src" / "index.html").unlink()

    result = runner.invoke(
        main, ["--project-root", str(project_root), "describe", "--no-check"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["mode"] == "production"


def test_invalid_settings_exit(runner: CliRunner, project_root: Path):
    result = runner.invoke(
        main,
        ["--project-root", str(project_root), "describe"],
        env={"BUNDLEPLAN_DEV_SERVER_PORT": "0"},
    )

    assert result.exit_code == 1


def test_check_command(runner: CliRunner, project_root: Path):
    result = runner.invoke(
        main,
        ["--project-root", str(project_root), "check", "--mode", "production"],
    )

    assert result.exit_code == 0, result.output
    assert "bundle-analyzer" in result.output
    assert "Build sources verified" in result.output


def test_check_command_missing_entry(runner: CliRunner, project_root: Path):
    (project_root / "src" / "index.tsx").unlink()

    result = runner.invoke(main, ["--project-root", str(project_root), "check"])

    assert result.exit_code == 1
