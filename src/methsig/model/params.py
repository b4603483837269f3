# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parameter representations for the signature model."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PositionalParameter(BaseModel):
    """A parameter bound by position, e.g. ``Str $name?``.

    Attributes:
        type_constraint: The constraint text, e.g. ``Int|Str`` or ``ArrayRef[Int]``.
        variable_name: The bound variable including its sigil.
        required: Whether a caller must supply the argument.
        default_value: The unevaluated default expression as written.
        constraints: Raw ``where`` blocks, braces included, in source order.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["positional"] = "positional"
    type_constraint: str | None = None
    variable_name: str
    required: bool = True
    default_value: str | None = None
    constraints: tuple[str, ...] = ()

    def to_string(self) -> str:
        """Render the parameter back into signature syntax."""
        text = _render_type(self.type_constraint) + self.variable_name
        if not self.required:
            text += "?"
        return text + _render_tail(self.default_value, self.constraints)


class NamedParameter(BaseModel):
    """A parameter passed by keyword, e.g. ``:$name`` or ``:apan($affe)``.

    Attributes:
        type_constraint: The constraint text.
        variable_name: The bound variable including its sigil.
        label: The explicit call keyword, or None when the variable name is used.
        required: Whether a caller must supply the argument.
        default_value: The unevaluated default expression as written.
        constraints: Raw ``where`` blocks, braces included, in source order.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["named"] = "named"
    type_constraint: str | None = None
    variable_name: str
    label: str | None = None
    required: bool = False
    default_value: str | None = None
    constraints: tuple[str, ...] = ()

    @property
    def call_label(self) -> str:
        """The keyword callers use: the explicit label or the sigil-less variable name."""
        return self.label if self.label is not None else self.variable_name[1:]

    def to_string(self) -> str:
        """Render the parameter back into signature syntax."""
        text = _render_type(self.type_constraint) + ":"
        if self.label is not None:
            text += f"{self.label}({self.variable_name})"
        else:
            text += self.variable_name
        if self.required:
            text += "!"
        return text + _render_tail(self.default_value, self.constraints)


# Either parameter variant; `kind` selects the model when deserializing.
Parameter = Annotated[PositionalParameter | NamedParameter, _Field(discriminator="kind")]


# ################
# Implementation
# ################


def _render_type(type_constraint: str | None) -> str:
    return f"{type_constraint} " if type_constraint else ""


def _render_tail(default_value: str | None, constraints: tuple[str, ...]) -> str:
    text = ""
    if default_value is not None:
        text += f" = {default_value}"
    for block in constraints:
        text += f" where {block}"
    return text
