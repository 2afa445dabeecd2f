"""Typer CLI entrypoint."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from zwclassify.core.classifier import Classifier
from zwclassify.core.device_loader import load_device
from zwclassify.core.errors import ZWClassifyError
from zwclassify.transports.recording import RecordingConfigWriter

app = typer.Typer(help="Classify Z-Wave devices into gateway device types and properties")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_classifier(writer: RecordingConfigWriter) -> Classifier:
    classifier = Classifier(writer)
    for warning in classifier.load_warnings:
        typer.echo(f"Warning: {warning}", err=True)
    return classifier


@app.command("quirks")
def list_quirks(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """List loaded quirks in table order."""
    _configure_logging(verbose)
    try:
        classifier = _build_classifier(RecordingConfigWriter())
        if not classifier.quirks:
            typer.echo("No quirks loaded")
            return

        for quirk in classifier.quirks:
            match = ", ".join(f"{k}={v}" for k, v in sorted(quirk.match.items()))
            typer.echo(f"{quirk.id}: {match}")
            if quirk.exclude_properties:
                typer.echo(f"  exclude: {', '.join(quirk.exclude_properties)}")
            for write in quirk.set_configs:
                typer.echo(f"  config: instance={write.instance} index={write.index} value={write.value}")
            for write in quirk.switch_configs:
                condition = f" when {write.device_type.value}" if write.device_type else ""
                typer.echo(
                    f"  switch config: instance={write.instance} index={write.index} "
                    f"value={write.value}{condition}"
                )
    except ZWClassifyError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("classify")
def classify_device(
    device_file: Path = typer.Argument(..., help="YAML device description"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Classify a device description and show the resulting type and properties.

    Configuration writes are recorded and printed, never sent.
    """
    _configure_logging(verbose)
    try:
        writer = RecordingConfigWriter()
        classifier = _build_classifier(writer)
        device = load_device(device_file)
        classifier.classify(device)
    except ZWClassifyError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    if as_json:
        result = {
            "id": device.id,
            "name": device.name,
            "type": device.type.value,
            "properties": {
                name: {
                    "description": prop.description.as_dict(),
                    "value_id": prop.value_id,
                    "set_transform": prop.set_transform,
                    "parse_transform": prop.parse_transform,
                }
                for name, prop in device.properties.items()
            },
            "config_writes": [
                {"instance": call.instance, "index": call.index, "value": call.value}
                for call in writer.calls
            ],
        }
        typer.echo(json.dumps(result, indent=2))
        return

    typer.echo(f"Device: {device.id} ({device.name})")
    typer.echo(f"Type: {device.type.value}")
    for name, prop in device.properties.items():
        descr = prop.description.as_dict()
        details = ", ".join(f"{k}={v}" for k, v in descr.items())
        typer.echo(f"  {name}: {details} <- {prop.value_id}")
    for call in writer.calls:
        typer.echo(f"Config write: instance={call.instance} index={call.index} value={call.value}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
