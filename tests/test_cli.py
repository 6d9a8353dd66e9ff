"""Tests for the skill-activation click CLI."""

import json

from click.testing import CliRunner

from skill_activation.cli import main


class TestCheck:
    """Tests for the check subcommand."""

    def test_json_output(self, testing_rules):
        """--json prints the hook output document."""
        result = CliRunner().invoke(
            main, ["check", "please add a test", "--rules", str(testing_rules), "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["suggestions"] == ["testing"]

    def test_json_no_match(self, testing_rules):
        """--json prints an empty object when nothing matches."""
        result = CliRunner().invoke(
            main, ["check", "refactor", "--rules", str(testing_rules), "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {}

    def test_table_shows_reason(self, write_rules):
        """The table names the matching phrase and file pattern."""
        rules = write_rules(
            {"styling": {"triggers": {"prompt": ["color"], "files": ["**/*.css"]}}}
        )
        result = CliRunner().invoke(
            main,
            ["check", "change the color", "-f", "app/main.css", "--rules", str(rules)],
        )
        assert result.exit_code == 0
        assert "styling" in result.output
        assert '"color"' in result.output

    def test_no_match(self, testing_rules):
        """A prompt with no match says so."""
        result = CliRunner().invoke(main, ["check", "refactor", "--rules", str(testing_rules)])
        assert result.exit_code == 0
        assert "No skills match" in result.output

    def test_bad_rules(self, tmp_path):
        """A missing rule file exits 1."""
        result = CliRunner().invoke(
            main, ["check", "x", "--rules", str(tmp_path / "missing.json")]
        )
        assert result.exit_code == 1


class TestValidate:
    """Tests for the validate subcommand."""

    def test_ok(self, testing_rules):
        """A good rule file validates."""
        result = CliRunner().invoke(main, ["validate", "--rules", str(testing_rules)])
        assert result.exit_code == 0
        assert "OK" in result.output

    def test_warns_on_rules_without_triggers(self, write_rules):
        """Rules that can never fire are flagged."""
        rules = write_rules({"idle": {"description": "never fires"}})
        result = CliRunner().invoke(main, ["validate", "--rules", str(rules)])
        assert result.exit_code == 0
        assert "idle" in result.output
        assert "Warning" in result.output

    def test_malformed(self, tmp_path):
        """A malformed rule file fails validation."""
        path = tmp_path / "skill-rules.json"
        path.write_text("{")
        result = CliRunner().invoke(main, ["validate", "--rules", str(path)])
        assert result.exit_code == 1


def test_list(write_rules):
    """list shows every rule."""
    rules = write_rules(
        {
            "beta": {"triggers": {"prompt": ["x"]}, "priority": 2},
            "alpha": {"triggers": {"prompt": ["y"]}, "priority": 1},
        }
    )
    result = CliRunner().invoke(main, ["list", "--rules", str(rules)])
    assert result.exit_code == 0
    assert result.output.index("alpha") < result.output.index("beta")


def test_hook_command(testing_rules):
    """The hook subcommand behaves like the hook script."""
    result = CliRunner().invoke(
        main,
        ["hook", "--rules", str(testing_rules)],
        input=json.dumps({"prompt": "add a test"}),
    )
    assert result.exit_code == 0
    assert json.loads(result.output)["autoActivate"] == ["testing"]
