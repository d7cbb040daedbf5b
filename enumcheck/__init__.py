from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from enumcheck.constraints import ConstraintGenerator, EnumConstraints, KindState
from enumcheck.errors import ConfigurationError
from enumcheck.field import Field
from enumcheck.kind import Kind
from enumcheck.spec import EnumSpec

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            rich_tracebacks=True,
            show_level=False,
            show_path=False,
            markup=True,
            tracebacks_suppress=[click],
        )
    ],
)

log = logging.getLogger("enumcheck")


__all__ = [
    "log",
    "ConfigurationError",
    "ConstraintGenerator",
    "EnumConstraints",
    "EnumSpec",
    "Field",
    "Kind",
    "KindState",
]
