"""CLI for hubform."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from hubform import __version__
from hubform.client.fetcher import FormFetcher
from hubform.client.http import create_http_client
from hubform.client.submitter import FormSubmitter, SubmissionError, SubmissionSuccess
from hubform.config import HubFormSettings, load_settings
from hubform.errors import HubFormError
from hubform.fields.models import FormDefinition
from hubform.fields.normalizer import normalize
from hubform.log import configure_logging

app = typer.Typer(
    name="hubform",
    help="Render and relay HubSpot contact forms.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"hubform version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """hubform: render and relay HubSpot contact forms."""
    pass


def _load_settings(config_path: Path | None) -> HubFormSettings:
    try:
        settings = load_settings(config_path=config_path)
    except HubFormError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(settings.log_level)
    return settings


def _read_values(input_path: Path) -> dict:
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(1)

    with open(input_path) as f:
        try:
            values = json.load(f)
        except json.JSONDecodeError as e:
            console.print(f"[red]Error:[/red] Invalid JSON in {input_path}: {e}")
            raise typer.Exit(1)

    if not isinstance(values, dict):
        console.print("[red]Error:[/red] Input must be a JSON object of field name -> value")
        raise typer.Exit(1)
    return values


ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", envvar="HUBFORM_CONFIG", help="YAML config file"),
]
FormIdOption = Annotated[
    str | None,
    typer.Option("--form-id", "-f", help="Form id (default: CONTACTFORMID)"),
]


@app.command()
def serve(
    config_path: ConfigOption = None,
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Bind port")] = None,
) -> None:
    """Serve the rendered form and the /api proxy."""
    import uvicorn

    from hubform.web import create_app

    settings = _load_settings(config_path)
    bind_host = host or settings.host
    bind_port = port or settings.port

    console.print(f"[bold]hubform[/bold] v{__version__}")
    console.print(f"  Form: {settings.form_id}")
    console.print(f"  Portal: {settings.portal_id}")
    console.print(f"  Allowed origin: {settings.allowed_origin}")
    console.print(f"  Listening on http://{bind_host}:{bind_port}")

    uvicorn.run(
        create_app(settings),
        host=bind_host,
        port=bind_port,
        log_level=settings.log_level.lower(),
    )


async def _fetch(settings: HubFormSettings, form_id: str) -> FormDefinition:
    async with create_http_client(settings.http_timeout) as client:
        return await FormFetcher(client).fetch(form_id, settings.api_token)


@app.command()
def fetch(
    form_id: FormIdOption = None,
    config_path: ConfigOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print raw JSON")] = False,
) -> None:
    """Fetch a form schema and print its fields."""
    settings = _load_settings(config_path)
    resolved_form_id = form_id or settings.form_id

    try:
        definition = asyncio.run(_fetch(settings, resolved_form_id))
    except HubFormError as e:
        console.print(f"[red]Error fetching form:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(definition.to_payload()))
        return

    table = Table(title=f"Form {resolved_form_id}")
    table.add_column("Group", justify="right")
    table.add_column("Name")
    table.add_column("Label")
    table.add_column("Type")
    table.add_column("Required")
    for index, group in enumerate(definition.field_groups, 1):
        for field in group.fields:
            table.add_row(
                str(index),
                field.name,
                field.label,
                field.field_type,
                "yes" if field.required else "",
            )
    console.print(table)
    console.print(f"Submit button: {definition.submit_button_text or '(none)'}")


@app.command("normalize")
def normalize_command(
    input_path: Annotated[
        Path,
        typer.Option("--in", "-i", help="JSON file of field name -> raw value"),
    ],
) -> None:
    """Print the normalized field list for a file of raw values."""
    values = _read_values(input_path)
    fields = normalize(values)
    console.print_json(json.dumps([field.model_dump() for field in fields]))


async def _submit(
    settings: HubFormSettings, form_id: str, values: dict
) -> SubmissionSuccess | SubmissionError:
    async with create_http_client(settings.http_timeout) as client:
        return await FormSubmitter(client).submit(settings.portal_id, form_id, normalize(values))


@app.command()
def submit(
    input_path: Annotated[
        Path,
        typer.Option("--in", "-i", help="JSON file of field name -> raw value"),
    ],
    form_id: FormIdOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Normalize a file of raw values and submit it."""
    values = _read_values(input_path)
    settings = _load_settings(config_path)
    resolved_form_id = form_id or settings.form_id

    result = asyncio.run(_submit(settings, resolved_form_id, values))
    if isinstance(result, SubmissionSuccess):
        console.print(f"[green]Submitted[/green] {len(values)} fields to form {resolved_form_id}")
        return

    console.print(f"[red]Submission failed:[/red] {result.message}")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
