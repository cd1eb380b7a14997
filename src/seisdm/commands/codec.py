"""Wire codec CLI subcommands to inspect and produce message payloads.

Run: seisdm messages, seisdm decode --help or seisdm encode --help for usage.
"""

from __future__ import annotations

import json
from enum import IntEnum
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich import print  # noqa: A004

from seisdm.exceptions import MalformedInputError
from seisdm.exceptions import UnknownMessageTypeError
from seisdm.schemas.registry import ENUM_TYPES
from seisdm.schemas.registry import MESSAGE_TYPES
from seisdm.schemas.registry import get_type
from seisdm.wire.codec import decode
from seisdm.wire.codec import encode

app = typer.Typer(help="Encode and decode seismic data model payloads.")


TypeNameType = Annotated[str, typer.Argument(help="Message or enum type name, e.g. Trace or FileStep.")]
InputType = Annotated[Path, typer.Argument(help="Path to the input file.", exists=True, dir_okay=False)]
OutputType = Annotated[Path, typer.Argument(help="Path to the output wire file.", dir_okay=False)]
LenientType = Annotated[
    bool | None,
    typer.Option("--lenient/--strict", help="Oneof conflict policy. Defaults to SEISDM__DECODE__UNION_POLICY."),
]


def _resolve_type(type_name: str) -> type:
    try:
        return get_type(type_name)
    except UnknownMessageTypeError as err:
        typer.secho(f"{err}. Run `seisdm messages` to list known types.", fg="red", err=True)
        raise typer.Exit(2) from None


@app.command(name="messages")
def list_messages() -> None:
    """List the message and enum types known to the codec."""
    print("[bold]Messages[/bold]")
    for name in sorted(MESSAGE_TYPES):
        print(f"  {name}")

    print("[bold]Enums[/bold]")
    for name, enum_type in sorted(ENUM_TYPES.items()):
        members = ", ".join(f"{member.name}={member.value}" for member in enum_type)
        print(f"  {name}: {members}")


@app.command(name="decode")
def decode_payload(type_name: TypeNameType, input_path: InputType, lenient: LenientType = None) -> None:
    """Decode a wire payload and print it as JSON.

    \b
    Example:
    - seisdm decode Trace trace.bin
    - seisdm decode SurveyGridTransformation grid.bin --lenient
    """
    message_type = _resolve_type(type_name)
    strict = None if lenient is None else not lenient

    try:
        value = decode(message_type, input_path.read_bytes(), strict=strict)
    except MalformedInputError as err:
        typer.secho(f"Can't decode {type_name}: {err}", fg="red", err=True)
        raise typer.Exit(1) from None

    if isinstance(value, IntEnum):
        typer.echo(json.dumps(value.name))
    else:
        typer.echo(value.model_dump_json(indent=2))


@app.command(name="encode")
def encode_payload(type_name: TypeNameType, input_path: InputType, output_path: OutputType) -> None:
    """Validate a JSON document against a type and write its wire payload.

    Enum documents are a JSON string (member name) or number.

    \b
    Example:
    - seisdm encode Trace trace.json trace.bin
    """
    message_type = _resolve_type(type_name)
    text = input_path.read_text()

    try:
        if issubclass(message_type, IntEnum):
            raw = json.loads(text)
            value = message_type[raw] if isinstance(raw, str) else message_type(raw)
        else:
            value = message_type.model_validate_json(text)
    except (ValidationError, json.JSONDecodeError, KeyError, ValueError) as err:
        typer.secho(f"Invalid {type_name} document: {err}", fg="red", err=True)
        raise typer.Exit(1) from None

    payload = encode(value)
    output_path.write_bytes(payload)
    print(f"Wrote {len(payload)} bytes: {input_path} -> {output_path}")
