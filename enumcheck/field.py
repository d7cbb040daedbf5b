from __future__ import annotations

import dataclasses

from enumcheck.errors import ConfigurationError

OPTIONAL_MARKER = "?"


@dataclasses.dataclass(frozen=True)
class Field:
    name: str
    is_optional: bool = False

    def __str__(self):
        return f"{self.name}{OPTIONAL_MARKER}" if self.is_optional else self.name

    @classmethod
    def from_token(cls, token: str) -> Field:
        """

        >>> Field.from_token("a")
        Field(name='a', is_optional=False)

        >>> Field.from_token("b?")
        Field(name='b', is_optional=True)

        """
        if not isinstance(token, str):
            raise ConfigurationError(f"Field tokens must be strings, got {token!r}")
        token = token.strip()
        is_optional = token.endswith(OPTIONAL_MARKER)
        name = token.removesuffix(OPTIONAL_MARKER) if is_optional else token
        if not name:
            raise ConfigurationError(f"Blank field name in token {token!r}")
        return cls(name=name, is_optional=is_optional)
