from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
import typer

from formbuilder.catalog import list_templates, templates_by_category
from formbuilder.config import Settings
from formbuilder.export import (
    EXPORT_FORMATS,
    export_csv,
    fields_from_payload,
    format_file_size,
    submission_stats,
)
from formbuilder.schema import FIELDS_PAYLOAD_SCHEMA, SUBMISSIONS_PAYLOAD_SCHEMA, check_payload

cli = typer.Typer(add_completion=False)


def run_server(host: str | None, port: int | None) -> None:
    import uvicorn

    from formbuilder.app import create_app

    settings = Settings()
    resolved_host = host or settings.host
    resolved_port = port if port is not None else settings.port
    uvicorn.run(create_app(settings), host=resolved_host, port=resolved_port, log_level=settings.log_level)


def _load_export_file(path: Path) -> dict[str, Any]:
    try:
        payload = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        typer.echo(f"読み込みに失敗しました: {path} ({exc})", err=True)
        raise typer.Exit(code=1)
    if not isinstance(payload, dict):
        typer.echo("JSONのトップレベルはオブジェクトである必要があります", err=True)
        raise typer.Exit(code=1)
    return payload


def _checked_list(payload: dict[str, Any], key: str, schema: dict[str, Any]) -> list[Any]:
    items = payload.get(key) or []
    errors = check_payload(items, schema)
    if errors:
        for message in errors:
            typer.echo(f"{key}が不正です: {message}", err=True)
        raise typer.Exit(code=1)
    return items


@cli.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    host: str | None = typer.Option(None, help="バインドするアドレス"),
    port: int | None = typer.Option(None, help="バインドするポート"),
) -> None:
    ctx.obj = {"host": host, "port": port}
    if ctx.invoked_subcommand is None:
        run_server(host, port)


@cli.command()
def run(
    ctx: typer.Context,
    host: str | None = typer.Option(None, help="バインドするアドレス"),
    port: int | None = typer.Option(None, help="バインドするポート"),
) -> None:
    base = ctx.obj or {}
    resolved_host = host or base.get("host")
    resolved_port = port if port is not None else base.get("port")
    run_server(resolved_host, resolved_port)


@cli.command()
def templates(
    category: str | None = typer.Option(None, help="カテゴリで絞り込む"),
) -> None:
    items = templates_by_category(category) if category else list_templates()
    for template in items:
        typer.echo(f"{template.id}\t{template.category}\t{template.name} ({len(template.fields)} fields)")


@cli.command()
def export(
    source: Path = typer.Argument(..., help="fields と submissions を含むJSONファイル"),
    output: Path | None = typer.Option(None, "--output", "-o", help="出力先（省略時は標準出力）"),
    fmt: str = typer.Option("csv", "--format", help="csv または tsv"),
    include_metadata: bool = typer.Option(False, help="審査日時とメモを含める"),
) -> None:
    if fmt not in EXPORT_FORMATS:
        typer.echo(f"formatが不正です ({fmt})", err=True)
        raise typer.Exit(code=1)
    payload = _load_export_file(source)
    raw_fields = _checked_list(payload, "fields", FIELDS_PAYLOAD_SCHEMA)
    submissions = _checked_list(payload, "submissions", SUBMISSIONS_PAYLOAD_SCHEMA)
    delimiter, _ = EXPORT_FORMATS[fmt]
    content = export_csv(
        fields_from_payload(raw_fields),
        submissions,
        include_metadata=include_metadata,
        delimiter=delimiter,
    )
    if output is None:
        typer.echo(content, nl=False)
        return
    data = content.encode("utf-8")
    output.write_bytes(data)
    typer.echo(f"{output} ({format_file_size(len(data))})", err=True)


@cli.command()
def stats(
    source: Path = typer.Argument(..., help="submissions を含むJSONファイル"),
) -> None:
    payload = _load_export_file(source)
    submissions = _checked_list(payload, "submissions", SUBMISSIONS_PAYLOAD_SCHEMA)
    result = submission_stats(submissions)
    typer.echo(orjson.dumps(result, option=orjson.OPT_INDENT_2).decode("utf-8"))
