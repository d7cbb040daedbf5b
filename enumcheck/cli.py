from __future__ import annotations

import functools
import json
import pathlib
import re

import click
import dotenv
import rich.console
import rich.syntax
import rich.table

import enumcheck
from enumcheck import ddl
from enumcheck.constraints import EnumConstraints
from enumcheck.databases import DuckDBClient
from enumcheck.errors import ConfigurationError

console = rich.console.Console()


def parse_kind_option(kind: str) -> list[str]:
    """

    >>> parse_kind_option("k1 a b c?")
    ['k1', 'a', 'b', 'c?']

    >>> parse_kind_option("k2: b, d")
    ['k2', 'b', 'd']

    """
    return [token for token in re.split(r"[\s,:]+", kind) if token]


def load_generator(column, kinds, table, anonymous, spec) -> EnumConstraints:
    try:
        if spec is not None:
            try:
                data = json.loads(pathlib.Path(spec).read_text())
            except json.JSONDecodeError as e:
                raise click.ClickException(f"Could not parse {spec}: {e}") from e
            if not isinstance(data, dict):
                raise click.ClickException(f"{spec} must hold a JSON object")
            # The convention is fixed by the file itself, before --table is merged in
            data.setdefault("named", "table" not in data)
            if anonymous:
                data["named"] = False
            if table is not None:
                data["table"] = table
            return EnumConstraints.from_dict(data)
        if column is None:
            raise click.ClickException("Either --spec or --column must be provided")
        return EnumConstraints.from_rows(
            column,
            [parse_kind_option(kind) for kind in kinds],
            table_name=table,
            named=not anonymous,
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def spec_options(command):
    @click.option("--column", "-c", default=None, help="Name of the enum column.")
    @click.option(
        "--kind",
        "-k",
        "kinds",
        multiple=True,
        help="One kind per option, e.g. 'k1 a b c?'. A trailing ? marks an optional field.",
    )
    @click.option("--table", "-t", default=None, help="Name of the table holding the enum.")
    @click.option(
        "--anonymous", is_flag=True, default=False, help="Whether kinds carry no leading name."
    )
    @click.option("--spec", default=None, type=click.Path(exists=True), help="JSON spec file.")
    @functools.wraps(command)
    def wrapper(column, kinds, table, anonymous, spec, **kwargs):
        generator = load_generator(column, kinds, table, anonymous, spec)
        return command(generator, **kwargs)

    return wrapper


@click.group()
def app():
    dotenv.load_dotenv(".env", verbose=True)


@app.command()
@spec_options
def definition(generator):
    click.echo(generator.enum_definition())


@app.command()
@spec_options
def constraints(generator):
    for constraint in generator.constraints():
        click.echo(constraint)


@app.command()
@spec_options
def kinds(generator):
    table = rich.table.Table()
    table.add_column("Kind")
    table.add_column("Value")
    table.add_column("Ins")
    table.add_column("Outs")
    for state in generator.iter_kinds():
        table.add_row(
            str(state.kind),
            str(state.kind.value),
            ", ".join(map(str, state.kind.fields)),
            ", ".join(state.outs),
        )
    console.print(table)


@app.command("create-table")
@spec_options
@click.option(
    "--type", "types", nargs=2, type=str, multiple=True, help="Column name and its SQL type."
)
@click.option("--pretty", is_flag=True, default=False, help="Whether to format the SQL code.")
def create_table(generator, types, pretty):
    try:
        code = ddl.create_table(generator, columns=dict(types))
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    if pretty:
        console.print(rich.syntax.Syntax(ddl.format_sql(code), "sql"))
    else:
        click.echo(code)


@app.command()
@spec_options
def drop(generator):
    try:
        statements = ddl.drop_constraints(generator)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    for statement in statements:
        click.echo(f"{statement};")


@app.command()
@spec_options
@click.option(
    "--type", "types", nargs=2, type=str, multiple=True, help="Column name and its SQL type."
)
@click.option("--duckdb", "duckdb_path", default=None, help="Path to the DuckDB database.")
def apply(generator, types, duckdb_path):
    client = DuckDBClient(duckdb_path) if duckdb_path else DuckDBClient.from_env()
    with client:
        try:
            client.apply(generator, columns=dict(types))
        except ConfigurationError as e:
            raise click.ClickException(str(e)) from e
    enumcheck.log.info(f"✅ Applied enum {generator.column_name} to {client.path}")
