"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from steplib.cli import _build_parser, main

STEPS = """
    public class CartSteps {
        @Given("an empty cart")
        public void emptyCart() {
        }

        @Then("the cart holds {int} items")
        public void holds(int count) {
        }
    }
"""


def _exit_code(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


def test_parser_accepts_positional_arguments() -> None:
    args = _build_parser().parse_args(["src/test/java", "out.yaml", "--verbose"])

    assert args.source_directory == "src/test/java"
    assert args.output_file == "out.yaml"
    assert args.verbose is True


def test_parser_collects_repeated_globs() -> None:
    args = _build_parser().parse_args(
        ["src", "--include", "*.java", "--include", "*.groovy", "--exclude", "**/gen/**"]
    )

    assert args.include == ["*.java", "*.groovy"]
    assert args.exclude == ["**/gen/**"]
    assert args.output_file is None


def test_help_exits_zero_without_writing(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    assert _exit_code(["--help"]) == 0
    assert "source_directory" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_missing_arguments_exit_one(capsys) -> None:
    assert _exit_code([]) == 1
    assert "usage:" in capsys.readouterr().err


def test_too_many_arguments_exit_one(tmp_path: Path) -> None:
    assert _exit_code([str(tmp_path), "a.yaml", "extra"]) == 1


def test_missing_source_directory_exits_one(tmp_path: Path, capsys) -> None:
    assert _exit_code([str(tmp_path / "missing")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_file_source_exits_one(tmp_path: Path, capsys) -> None:
    target = tmp_path / "Steps.java"
    target.write_text(STEPS, encoding="utf-8")

    assert _exit_code([str(target)]) == 1
    assert "not a directory" in capsys.readouterr().err


def test_main_writes_default_output(source_tree, tmp_path: Path, monkeypatch) -> None:
    source_tree.write({"CartSteps.java": STEPS})
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    main([str(source_tree.path()), "--quiet"])

    document = yaml.safe_load((workdir / "step_library.yaml").read_text(encoding="utf-8"))
    assert document["given_steps"] == ["an empty cart"]
    assert document["then_steps"] == ["the cart holds {int} items"]
    assert document["metadata"]["total_steps"] == 2
    assert document["metadata"]["extraction_date"].endswith("Z")


def test_main_honours_output_and_config(source_tree, tmp_path: Path) -> None:
    source_tree.write(
        {
            "CartSteps.java": STEPS,
            "legacy/OldSteps.java": """
                @When("a legacy step")
                public void legacy() {
                }
            """,
            ".steplib.yml": "exclude:\n  - '**/legacy/**'\n",
        }
    )
    output = tmp_path / "reports" / "steps.yaml"

    main([str(source_tree.path()), str(output), "-q"])

    document = yaml.safe_load(output.read_text(encoding="utf-8"))
    assert document["when_steps"] == []
    assert document["metadata"]["source_files"] == ["CartSteps.java"]


def test_main_with_no_source_files_exits_cleanly(tmp_path: Path, monkeypatch) -> None:
    source = tmp_path / "empty"
    source.mkdir()
    monkeypatch.chdir(tmp_path)

    main([str(source)])

    assert not (tmp_path / "step_library.yaml").exists()


def test_unwritable_output_exits_one(source_tree, tmp_path: Path) -> None:
    source_tree.write({"CartSteps.java": STEPS})
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")

    assert _exit_code([str(source_tree.path()), str(blocker / "nested" / "out.yaml")]) == 1


def test_invalid_config_exits_one(source_tree, capsys) -> None:
    source_tree.write({"CartSteps.java": STEPS, ".steplib.yml": "- just\n- a list\n"})

    assert _exit_code([str(source_tree.path())]) == 1
    assert "mapping" in capsys.readouterr().err


def test_log_file_receives_debug_output(source_tree, tmp_path: Path) -> None:
    source_tree.write({"CartSteps.java": STEPS})
    log_file = tmp_path / "logs" / "run.log"

    main([str(source_tree.path()), str(tmp_path / "out.yaml"), "-q", "--log-file", str(log_file)])

    contents = log_file.read_text(encoding="utf-8")
    assert "Processing: CartSteps.java" in contents
