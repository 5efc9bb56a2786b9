import orjson
from typer.testing import CliRunner

from formbuilder.cli import cli

runner = CliRunner()


def _write_source(tmp_path):
    source = tmp_path / "submissions.json"
    source.write_bytes(
        orjson.dumps(
            {
                "fields": [{"type": "text", "label": "Name"}, {"type": "email", "label": "Email"}],
                "submissions": [
                    {
                        "id": "1",
                        "submitted_at": "2024-05-19T09:30:00+00:00",
                        "status": "pending",
                        "data": {"Name": "Ada", "Email": "ada@example.com"},
                    }
                ],
            }
        )
    )
    return source


def test_templates_command():
    result = runner.invoke(cli, ["templates", "--category", "Research"])
    assert result.exit_code == 0
    assert result.output.startswith("customer-survey\tResearch\tCustomer Survey")


def test_export_to_stdout(tmp_path):
    result = runner.invoke(cli, ["export", str(_write_source(tmp_path))])
    assert result.exit_code == 0
    assert "Submission ID,Submitted At,Status,Name,Email" in result.output
    assert "1,2024-05-19 09:30:00,pending,Ada,ada@example.com" in result.output


def test_export_to_file(tmp_path):
    target = tmp_path / "out.tsv"
    result = runner.invoke(
        cli, ["export", str(_write_source(tmp_path)), "--output", str(target), "--format", "tsv"]
    )
    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8").startswith("Submission ID\tSubmitted At")


def test_stats_command(tmp_path):
    result = runner.invoke(cli, ["stats", str(_write_source(tmp_path))])
    assert result.exit_code == 0
    assert orjson.loads(result.output)["pending"] == 1


def test_missing_source_fails(tmp_path):
    result = runner.invoke(cli, ["stats", str(tmp_path / "missing.json")])
    assert result.exit_code == 1


def test_stats_rejects_non_object_submissions(tmp_path):
    source = tmp_path / "bad.json"
    source.write_bytes(orjson.dumps({"submissions": ["oops", 3]}))
    result = runner.invoke(cli, ["stats", str(source)])
    assert result.exit_code == 1


def test_export_rejects_malformed_fields(tmp_path):
    source = tmp_path / "bad.json"
    source.write_bytes(orjson.dumps({"fields": [{"label": "Name", "order": "x"}], "submissions": []}))
    result = runner.invoke(cli, ["export", str(source)])
    assert result.exit_code == 1


def test_export_rejects_unknown_format(tmp_path):
    result = runner.invoke(cli, ["export", str(_write_source(tmp_path)), "--format", "xlsx"])
    assert result.exit_code == 1
