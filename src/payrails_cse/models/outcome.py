"""Typed results of a tokenize call."""

from dataclasses import dataclass
from typing import Union

from payrails_cse.models.instrument import Instrument, PayrailsError


@dataclass(frozen=True)
class TokenizeSuccess:
    """201 response carrying the created instrument."""

    code: int
    instrument: Instrument


@dataclass(frozen=True)
class TokenizeFailure:
    """Non-201 response carrying the server's error list."""

    code: int
    errors: list[PayrailsError]


@dataclass(frozen=True)
class TokenizeEmpty:
    """Response without a body. Only the status code is known."""

    code: int


TokenizeOutcome = Union[TokenizeSuccess, TokenizeFailure, TokenizeEmpty]
