from __future__ import annotations

import dataclasses
from collections.abc import Sequence

from enumcheck.errors import ConfigurationError
from enumcheck.field import Field


@dataclasses.dataclass(frozen=True)
class Kind:
    value: int
    name: str | None
    fields: tuple[Field, ...] = ()

    def __str__(self):
        return self.name if self.name is not None else f"#{self.value}"

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]

    @property
    def optional_field_names(self) -> set[str]:
        return {field.name for field in self.fields if field.is_optional}

    @classmethod
    def from_row(cls, row: Sequence[str], value: int, named: bool = True) -> Kind:
        """Build a kind from a row of tokens.

        Under the named convention the first token is the kind's name and the rest are field
        tokens. Under the anonymous convention every token is a field token, and the kind is only
        identified by its position.

        """
        if isinstance(row, str) or not isinstance(row, Sequence):
            raise ConfigurationError(f"Kind #{value} must be a list of tokens, got {row!r}")

        name = None
        tokens = list(row)
        if named:
            if not tokens:
                raise ConfigurationError(f"Kind #{value} has no name")
            name, *tokens = tokens
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError(f"Kind #{value} has a blank name")
            name = name.strip()

        fields = tuple(Field.from_token(token) for token in tokens)

        seen = set()
        for field in fields:
            if field.name in seen:
                raise ConfigurationError(
                    f"Field {field.name!r} is declared more than once for kind "
                    f"{name if named else f'#{value}'}"
                )
            seen.add(field.name)

        return cls(value=value, name=name, fields=fields)
