# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Options accepted by the public parse functions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from methsig.model import NamedParameter, PositionalParameter, Signature

# ###############
# Public Interface
# ###############

# Factories receive the model's field values as keyword arguments.
ParameterFactory = Callable[..., Any]
SignatureFactory = Callable[..., Any]


class ParseOptionsError(ValueError):
    """Raised when parse options are inconsistent."""


@dataclass(frozen=True)
class ParseOptions:
    """Input and result-type selection for a single parse.

    Attributes:
        input: The text to parse.
        offset: Index into ``input`` where parsing starts.
        signature_factory: Builds the signature value from ``invocant``,
            ``params``, ``required_positional_count`` and ``required_named_labels``.
        positional_factory: Builds positional parameters.
        named_factory: Builds named parameters; also receives ``label``.

    Custom parameter factories that do not build the parameter models must
    come with a custom ``signature_factory``.
    """

    input: str
    offset: int = 0
    signature_factory: SignatureFactory = Signature
    positional_factory: ParameterFactory = PositionalParameter
    named_factory: ParameterFactory = NamedParameter

    def __post_init__(self) -> None:
        if not isinstance(self.input, str):
            raise ParseOptionsError(f"'input' must be a string, got {type(self.input).__name__}")
        if not 0 <= self.offset <= len(self.input):
            raise ParseOptionsError(f"'offset' {self.offset} is outside the input (length {len(self.input)})")
        for name in ("signature_factory", "positional_factory", "named_factory"):
            if not callable(getattr(self, name)):
                raise ParseOptionsError(f"'{name}' must be callable")
        # The Signature model only accepts parameter model instances.
        if self.signature_factory is Signature:
            for name, model in (("positional_factory", PositionalParameter), ("named_factory", NamedParameter)):
                factory = getattr(self, name)
                if not (isinstance(factory, type) and issubclass(factory, model)):
                    raise ParseOptionsError(
                        f"'{name}' must be a {model.__name__} subclass unless 'signature_factory' is replaced too"
                    )


def coerce_options(source: str | ParseOptions) -> ParseOptions:
    """Accept either raw signature text or a ready-made ParseOptions."""
    if isinstance(source, ParseOptions):
        return source
    return ParseOptions(input=source)
