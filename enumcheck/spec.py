from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence

from enumcheck.errors import ConfigurationError
from enumcheck.kind import Kind


@dataclasses.dataclass(frozen=True)
class EnumSpec:
    """An enum column and the kinds it can take.

    The 1-based position of each kind is its enum value. The universe of fields and the index of
    optional fields are derived once, in __post_init__, and never change afterwards.

    """

    column_name: str
    kinds: tuple[Kind, ...]
    table_name: str | None = None
    is_named: bool = True
    universe: frozenset[str] = dataclasses.field(init=False, repr=False, compare=False)
    optionals: frozenset[tuple[int, str]] = dataclasses.field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        if not isinstance(self.column_name, str) or not self.column_name.strip():
            raise ConfigurationError("The enum column name must not be blank")
        if not self.kinds:
            raise ConfigurationError(f"Enum {self.column_name!r} has no kinds")
        for position, kind in enumerate(self.kinds, start=1):
            if kind.value != position:
                raise ConfigurationError(
                    f"Kind {kind} has value {kind.value} but sits at position {position}"
                )

        # https://stackoverflow.com/a/54119384
        object.__setattr__(
            self, "universe", frozenset(name for kind in self.kinds for name in kind.field_names)
        )
        object.__setattr__(
            self,
            "optionals",
            frozenset(
                (kind.value, field.name)
                for kind in self.kinds
                for field in kind.fields
                if field.is_optional
            ),
        )

    @classmethod
    def from_rows(
        cls,
        column_name: str,
        rows: Sequence[Sequence[str]],
        table_name: str | None = None,
        named: bool = True,
    ) -> EnumSpec:
        if isinstance(rows, str) or not isinstance(rows, Sequence):
            raise ConfigurationError(f"Kinds must be a list of rows, got {rows!r}")
        if isinstance(column_name, str):
            column_name = column_name.strip()
        kinds = tuple(
            Kind.from_row(row, value=value, named=named) for value, row in enumerate(rows, start=1)
        )
        return cls(column_name=column_name, kinds=kinds, table_name=table_name, is_named=named)

    @classmethod
    def from_dict(cls, data: Mapping) -> EnumSpec:
        """

        >>> spec = EnumSpec.from_dict({"name": "kind", "fields": [["k1", "a"], ["k2", "b?"]]})
        >>> [str(kind) for kind in spec.kinds]
        ['k1', 'k2']

        >>> spec = EnumSpec.from_dict({"table": "t", "name": "kind", "fields": [["a"], ["b"]]})
        >>> spec.is_named, [str(kind) for kind in spec.kinds]
        (False, ['#1', '#2'])

        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"An enum spec must be a mapping, got {type(data).__name__}")
        column_name = data.get("name", data.get("column"))
        rows = data.get("fields", data.get("kinds"))
        if column_name is None:
            raise ConfigurationError("Missing enum column name")
        if rows is None:
            raise ConfigurationError(f"Enum {column_name!r} has no kinds")
        table_name = data.get("table")
        named = data.get("named", table_name is None)
        if not isinstance(named, bool):
            raise ConfigurationError(f"'named' must be true or false, got {named!r}")
        return cls.from_rows(column_name, rows, table_name=table_name, named=named)

    def is_optional(self, kind: Kind, field_name: str) -> bool:
        return (kind.value, field_name) in self.optionals
