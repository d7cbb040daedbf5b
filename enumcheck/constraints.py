from __future__ import annotations

import dataclasses
import functools
import pathlib
from collections.abc import Callable, Iterator, Mapping, Sequence

import jinja2

from enumcheck.kind import Kind
from enumcheck.spec import EnumSpec

TEMPLATES_DIR = pathlib.Path(__file__).parent / "templates"


@functools.cache
def load_template(name: str) -> jinja2.Template:
    return jinja2.Template((TEMPLATES_DIR / f"{name}.sql.jinja").read_text())


@dataclasses.dataclass(frozen=True)
class KindState:
    """The fields a kind requires, and the fields it forbids."""

    kind: Kind
    ins: list[str]
    outs: list[str]

    @property
    def name(self) -> str | None:
        return self.kind.name


class EnumConstraints:
    """Generates enum-like SQL constraints.

    An enum column takes one of the values 1 .. k. Each value is a kind, and each kind has sibling
    columns which must be set when the enum holds that value. Every other column mentioned by any
    kind must be null, except for the ones the kind marks as optional.

    >>> ec = EnumConstraints.from_rows("kind", [["k1", "a", "b"], ["k2", "b"]])
    >>> ec.enum_definition()
    'kind smallint not null check (kind > 0 and kind < 3)'
    >>> for constraint in ec.constraints():
    ...     print(constraint)
    constraint k1_has_a check (kind <> 1 or a is not null)
    constraint k1_has_b check (kind <> 1 or b is not null)
    constraint k2_has_b check (kind <> 2 or b is not null)
    constraint k2_has_no_a check (kind <> 2 or a is null)

    Parameters
    ----------
    spec
        The enum specification. It is never modified.

    """

    def __init__(self, spec: EnumSpec):
        self.spec = spec

    @classmethod
    def from_rows(
        cls,
        column_name: str,
        rows: Sequence[Sequence[str]],
        table_name: str | None = None,
        named: bool = True,
    ) -> EnumConstraints:
        return cls(EnumSpec.from_rows(column_name, rows, table_name=table_name, named=named))

    @classmethod
    def from_dict(cls, data: Mapping) -> EnumConstraints:
        return cls(EnumSpec.from_dict(data))

    def __repr__(self):
        return f"EnumConstraints({self.spec.column_name!r}, {len(self.spec.kinds)} kinds)"

    @property
    def column_name(self) -> str:
        return self.spec.column_name

    def enum_definition(self) -> str:
        return load_template("enum_definition").render(
            column=self.column_name, n_kinds=len(self.spec.kinds)
        )

    def iter_kinds(self) -> Iterator[KindState]:
        for kind in self.spec.kinds:
            ins = kind.field_names
            outs = sorted(self.spec.universe.difference(ins))
            yield KindState(kind=kind, ins=ins, outs=outs)

    def for_each_kind(self, visitor: Callable[[str | None, list[str], list[str]], bool | None]):
        """Run a visitor over the kinds, in declaration order.

        The visitor receives the kind name, the fields which are in the kind, and the fields which
        are out of it. The name is None for anonymous kinds. Returning False stops the iteration.

        """
        for state in self.iter_kinds():
            if visitor(state.name, state.ins, state.outs) is False:
                break

    def constraint_prefix(self, kind: Kind) -> str:
        if self.spec.is_named:
            return kind.name
        return f"{self.column_name}_{kind.value}"

    def constraints(self) -> list[str]:
        has, has_no = load_template("has"), load_template("has_no")
        constraints = []
        for state in self.iter_kinds():
            context = dict(
                prefix=self.constraint_prefix(state.kind),
                column=self.column_name,
                value=state.kind.value,
            )
            constraints.extend(
                has.render(field=field, **context)
                for field in state.ins
                if not self.spec.is_optional(state.kind, field)
            )
            constraints.extend(has_no.render(field=field, **context) for field in state.outs)
        return constraints

    def constraint_names(self) -> list[str]:
        return [constraint.split(" ", 2)[1] for constraint in self.constraints()]


ConstraintGenerator = EnumConstraints
