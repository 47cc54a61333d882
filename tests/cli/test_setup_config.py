"""CLI tests for `sbextract setup` and `sbextract config`."""

from __future__ import annotations

import json
from unittest.mock import patch

from click.testing import CliRunner
from fakes import FakeClient

from sbextract.cli import main
from sbextract.clients._base import RemoteCallError
from sbextract.config import load_exclusions
from sbextract.models import ExclusionConfig


class TestSetup:
    def test_prints_script(self) -> None:
        result = CliRunner().invoke(main, ["setup"])
        assert result.exit_code == 0
        assert "CREATE OR REPLACE FUNCTION public.get_policies()" in result.output
        assert "'pg_catalog'" in result.output

    def test_json_includes_lists(self) -> None:
        result = CliRunner().invoke(main, ["setup", "--format", "json"])
        data = json.loads(result.output)
        assert data["trigger_schemas"] == ["pgsodium", "storage", "realtime", "vault"]
        assert data["sql"].startswith("-- sbextract setup")

    def test_uses_stored_exclusions(self) -> None:
        runner = CliRunner()
        runner.invoke(main, ["config", "set", "functions"], input="")
        result = runner.invoke(main, ["setup"])
        get_functions = result.output.split("public.get_functions()", 1)[1].split("$$;")[0]
        assert "NOT IN" not in get_functions

    def test_run_through_exec_sql(self) -> None:
        client = FakeClient({"exec_sql": None})
        with patch("sbextract.cli._shared.get_client", return_value=lambda: client):
            result = CliRunner().invoke(main, [
                "setup", "--run", "--url", "https://abc.supabase.co", "--key", "service",
            ])
        assert result.exit_code == 0, result.output
        assert "Setup complete" in result.output
        assert client.called == ["exec_sql"]

    def test_run_without_exec_sql(self) -> None:
        client = FakeClient(errors={
            "exec_sql": RemoteCallError("function exec_sql(sql => text) does not exist"),
        })
        with patch("sbextract.cli._shared.get_client", return_value=lambda: client):
            result = CliRunner().invoke(main, [
                "setup", "--run", "--url", "https://abc.supabase.co", "--key", "service",
            ])
        assert result.exit_code == 1
        assert "Setup required" in result.output


class TestConfig:
    def test_show_defaults(self) -> None:
        result = CliRunner().invoke(main, ["config", "show", "--format", "json"])
        data = json.loads(result.output)
        assert data["function_schemas"][0] == "pg_catalog"

    def test_set_from_stdin(self) -> None:
        result = CliRunner().invoke(
            main, ["config", "set", "triggers"], input="storage\n\nauth\nstorage\n"
        )
        assert result.exit_code == 0
        assert "Saved 2 excluded trigger schemas" in result.output
        assert load_exclusions().trigger_schemas == ("storage", "auth")
        assert load_exclusions().function_schemas == ExclusionConfig.default().function_schemas

    def test_set_from_file(self, tmp_path) -> None:
        path = tmp_path / "functions.txt"
        path.write_text("pg_catalog\nextensions\n")
        result = CliRunner().invoke(main, ["config", "set", "functions", "--from-file", str(path)])
        assert result.exit_code == 0
        assert load_exclusions().function_schemas == ("pg_catalog", "extensions")

    def test_set_empty_warns(self) -> None:
        result = CliRunner().invoke(main, ["config", "set", "functions"], input="\n")
        assert "no schemas excluded" in result.output
        assert load_exclusions().function_schemas == ()

    def test_reset_one_list(self) -> None:
        runner = CliRunner()
        runner.invoke(main, ["config", "set", "functions"], input="a\n")
        runner.invoke(main, ["config", "set", "triggers"], input="b\n")
        result = runner.invoke(main, ["config", "reset", "functions"])
        assert result.exit_code == 0
        loaded = load_exclusions()
        assert loaded.function_schemas == ExclusionConfig.default().function_schemas
        assert loaded.trigger_schemas == ("b",)

    def test_reset_all(self) -> None:
        runner = CliRunner()
        runner.invoke(main, ["config", "set", "triggers"], input="b\n")
        result = runner.invoke(main, ["config", "reset"])
        assert "Restored default exclusion lists." in result.output
        assert load_exclusions() == ExclusionConfig.default()
