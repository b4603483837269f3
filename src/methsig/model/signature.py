# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""The top-level signature value produced by the parser."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from methsig.model.params import NamedParameter, Parameter, PositionalParameter

# ###############
# Public Interface
# ###############


class Signature(BaseModel):
    """A parsed method signature.

    Attributes:
        invocant: The receiver parameter written before ``:``, if any.
        params: Positional and named parameters in source order, invocant excluded.
        required_positional_count: Number of required positional parameters.
        required_named_labels: Call labels of the required named parameters,
            in source order.
    """

    model_config = ConfigDict(frozen=True)

    invocant: Parameter | None = None
    params: tuple[Parameter, ...] = ()
    required_positional_count: int = 0
    required_named_labels: tuple[str, ...] = ()

    @property
    def positional_params(self) -> tuple[PositionalParameter, ...]:
        return tuple(p for p in self.params if isinstance(p, PositionalParameter))

    @property
    def named_params(self) -> tuple[NamedParameter, ...]:
        return tuple(p for p in self.params if isinstance(p, NamedParameter))

    def named_param(self, label: str) -> NamedParameter | None:
        """Look up a named parameter by its call label."""
        for param in self.named_params:
            if param.call_label == label:
                return param
        return None

    def to_string(self) -> str:
        """Render the signature back into its canonical source form.

        Whitespace is normalized; everything else round-trips.
        """
        text = "("
        if self.invocant is not None:
            text += self.invocant.to_string() + ":"
            if self.params:
                text += " "
        text += ", ".join(param.to_string() for param in self.params)
        return text + ")"
