from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

import duckdb

import enumcheck
from enumcheck import ddl
from enumcheck.constraints import EnumConstraints

DEFAULT_DUCKDB_PATH = ":memory:"


class DuckDBClient:
    """Runs generated statements against a DuckDB database.

    Constraint violations are not caught: duckdb.ConstraintException reaches the caller.

    """

    def __init__(self, path: str = DEFAULT_DUCKDB_PATH):
        self.path = path
        self.con = duckdb.connect(path)

    @classmethod
    def from_env(cls) -> DuckDBClient:
        return cls(path=os.environ.get("ENUMCHECK_DUCKDB_PATH", DEFAULT_DUCKDB_PATH))

    def __repr__(self):
        return f"DuckDBClient(path={self.path!r})"

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.con.close()

    def execute(self, statement: str, parameters: list | None = None):
        return self.con.execute(statement, parameters)

    def execute_many(self, statements: Iterable[str]):
        for statement in statements:
            self.execute(statement)

    def apply(
        self,
        generator: EnumConstraints,
        table_name: str | None = None,
        columns: Mapping[str, str] | None = None,
    ) -> str:
        statement = ddl.create_table(generator, table_name=table_name, columns=columns)
        n_constraints = len(generator.constraints())
        enumcheck.log.info(f"🔩 Creating table with {n_constraints:,d} constraints")
        self.execute(statement)
        return statement
