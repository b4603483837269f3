# Copyright 2026 methsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value model for parsed method signatures."""

from methsig.model.params import NamedParameter, Parameter, PositionalParameter
from methsig.model.signature import Signature

__all__ = [
    "NamedParameter",
    "Parameter",
    "PositionalParameter",
    "Signature",
]
