"""CLI entrypoint for nulid."""

from datetime import datetime

import click

from nulid import __version__
from nulid.adapters.datetime_compat import from_datetime, to_datetime
from nulid.adapters.uuid_compat import from_uuid, to_uuid
from nulid.core.errors import NulidError
from nulid.core.identifier import Nulid
from nulid.generation.generator import Generator
from nulid.utils.timestamp import format_nanos

_ALIASES = {
    "gen": "generate",
    "g": "generate",
    "p": "parse",
    "i": "inspect",
    "d": "decode",
    "v": "validate",
    "cmp": "compare",
    "c": "compare",
    "s": "sort",
    "u": "uuid",
    "fu": "from-uuid",
    "dt": "datetime",
    "fdt": "from-datetime",
}


class AliasedGroup(click.Group):
    """Group that also resolves the short command names in _ALIASES."""

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, _ALIASES.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


def _parse(text, label="NULID"):
    try:
        return Nulid.parse(text)
    except NulidError as exc:
        raise click.ClickException(f"parsing {label} '{text}': {exc}")


def _inputs(values):
    """Arguments if given, else non-blank stdin lines."""
    if values:
        return list(values)
    stream = click.get_text_stream("stdin")
    return [line.strip() for line in stream if line.strip()]


@click.group(cls=AliasedGroup)
@click.version_option(__version__, prog_name="nulid")
def cli():
    """nulid - Nanosecond-precision Universally Lexicographically sortable IDentifiers."""


@cli.command()
@click.argument("count", type=click.IntRange(min=1), default=1)
@click.option("--node", type=click.IntRange(0, 65535), default=None, help="16-bit node tag embedded in every ID")
def generate(count, node):
    """Generate COUNT strictly increasing NULIDs (default: 1)."""
    generator = Generator(node=node)
    try:
        for _ in range(count):
            click.echo(str(generator.generate()))
    except NulidError as exc:
        raise click.ClickException(f"generating NULID: {exc}")


@cli.command()
@click.argument("value")
def parse(value):
    """Parse and print the canonical form of a NULID."""
    click.echo(str(_parse(value)))


@cli.command()
@click.argument("value")
def inspect(value):
    """Show the components of a NULID."""
    nulid = _parse(value)
    click.echo(f"NULID:       {nulid}")
    click.echo(f"Timestamp:   {nulid.nanos()} ns since epoch")
    click.echo(f"Seconds:     {nulid.seconds()} s")
    click.echo(f"Subsec:      {nulid.subsec_nanos()} ns")
    click.echo(f"Randomness:  {nulid.tail} (60-bit)")
    click.echo(f"Bytes:       {nulid.to_bytes().hex()}")
    try:
        click.echo(f"DateTime:    {format_nanos(nulid.nanos())}")
    except OverflowError:
        click.echo("DateTime:    out of range")
    click.echo(f"u128 value:  0x{nulid.hex()}")
    click.echo(f"UUID:        {to_uuid(nulid)}")


@cli.command()
@click.argument("value")
def decode(value):
    """Print the 16 big-endian bytes of a NULID as hex."""
    click.echo(_parse(value).to_bytes().hex())


@cli.command()
@click.argument("values", nargs=-1)
def validate(values):
    """Validate NULIDs from arguments or stdin; exit 1 if any is invalid."""
    valid = invalid = 0
    for value in _inputs(values):
        try:
            Nulid.parse(value)
        except NulidError as exc:
            click.echo(f"{value}: invalid ({exc})")
            invalid += 1
        else:
            click.echo(f"{value}: valid")
            valid += 1

    click.echo()
    click.echo(f"Valid:   {valid}")
    click.echo(f"Invalid: {invalid}")
    if invalid:
        click.get_current_context().exit(1)


@cli.command()
@click.argument("first")
@click.argument("second")
def compare(first, second):
    """Compare two NULIDs."""
    a = _parse(first, "first NULID")
    b = _parse(second, "second NULID")

    for label, nulid in (("NULID 1", a), ("NULID 2", b)):
        click.echo(f"{label}:     {nulid}")
        click.echo(f"  Timestamp: {nulid.nanos()} ns")
        click.echo(f"  Random:    {nulid.tail}")
        click.echo()

    if a < b:
        click.echo("Result:      NULID 1 < NULID 2 (earlier)")
        click.echo(f"Time diff:   {b.nanos() - a.nanos()} ns")
    elif a == b:
        click.echo("Result:      NULID 1 == NULID 2 (equal)")
    else:
        click.echo("Result:      NULID 1 > NULID 2 (later)")
        click.echo(f"Time diff:   {a.nanos() - b.nanos()} ns")


@cli.command(name="sort")
@click.argument("values", nargs=-1)
def sort_ids(values):
    """Sort NULIDs from arguments or stdin, printing them as given."""
    pairs = [(value, _parse(value)) for value in _inputs(values)]
    for value, _ in sorted(pairs, key=lambda pair: pair[1]):
        click.echo(value)


@cli.command(name="uuid")
@click.argument("value")
def uuid_cmd(value):
    """Convert a NULID to a UUID with the same 128 bits."""
    click.echo(str(to_uuid(_parse(value))))


@cli.command(name="from-uuid")
@click.argument("value")
def from_uuid_cmd(value):
    """Convert a UUID to a NULID."""
    try:
        click.echo(str(from_uuid(value)))
    except ValueError as exc:
        raise click.ClickException(f"parsing UUID '{value}': {exc}")


@cli.command(name="datetime")
@click.argument("value")
def datetime_cmd(value):
    """Print the timestamp of a NULID as an ISO 8601 datetime (microseconds)."""
    try:
        click.echo(to_datetime(_parse(value)).isoformat())
    except OverflowError:
        raise click.ClickException("timestamp is beyond year 9999")


@cli.command(name="from-datetime")
@click.argument("value")
def from_datetime_cmd(value):
    """Create a NULID from an ISO 8601 datetime, e.g. 2024-01-01T00:00:00Z."""
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        dt = datetime.fromisoformat(text)
    except ValueError as exc:
        raise click.ClickException(f"parsing datetime '{value}': {exc}; expected ISO 8601")
    try:
        click.echo(str(from_datetime(dt)))
    except NulidError as exc:
        raise click.ClickException(f"creating NULID: {exc}")


def main():
    cli()


if __name__ == "__main__":
    main()
