from __future__ import annotations

from collections.abc import Mapping

import sqlglot

from enumcheck.constraints import EnumConstraints, load_template
from enumcheck.errors import ConfigurationError

DEFAULT_COLUMN_TYPE = "text"


def resolve_table_name(generator: EnumConstraints, table_name: str | None) -> str:
    table_name = table_name or generator.spec.table_name
    if not table_name:
        raise ConfigurationError(
            f"No table name was given for enum {generator.column_name!r}, pass one explicitly"
        )
    return table_name


def create_table(
    generator: EnumConstraints,
    table_name: str | None = None,
    columns: Mapping[str, str] | None = None,
) -> str:
    """Return a statement which creates a table holding the enum and its sibling columns.

    Sibling columns are listed in alphabetical order. Their type is looked up in `columns`, and
    defaults to text.

    """
    columns = columns or {}
    return load_template("create_table").render(
        table=resolve_table_name(generator, table_name),
        definition=generator.enum_definition(),
        columns=[
            (name, columns.get(name, DEFAULT_COLUMN_TYPE))
            for name in sorted(generator.spec.universe)
        ],
        constraints=generator.constraints(),
    )


def add_constraints(generator: EnumConstraints, table_name: str | None = None) -> list[str]:
    table_name = resolve_table_name(generator, table_name)
    template = load_template("add_constraint")
    return [
        template.render(table=table_name, constraint=constraint)
        for constraint in generator.constraints()
    ]


def drop_constraints(generator: EnumConstraints, table_name: str | None = None) -> list[str]:
    table_name = resolve_table_name(generator, table_name)
    template = load_template("drop_constraint")
    return [template.render(table=table_name, name=name) for name in generator.constraint_names()]


def format_sql(code: str, dialect: str = "duckdb") -> str:
    return ";\n\n".join(sqlglot.transpile(code, read=dialect, write=dialect, pretty=True))
