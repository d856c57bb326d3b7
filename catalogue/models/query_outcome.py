# catalogue/models/query_outcome.py

"""Terminal outcome of one dispatched query."""

from dataclasses import dataclass
from typing import Any

UNKNOWN_ERROR = "Unknown error."
NO_NETWORK = "No network connection."


@dataclass(frozen=True)
class Ready:
    """The response was received and decoded."""

    payload: Any


@dataclass(frozen=True)
class ParseFailed:
    """The response arrived but its body was empty or undecodable."""


@dataclass(frozen=True)
class ConnectionFailed:
    """The request failed in transport or the server answered non-2xx."""

    message: str = UNKNOWN_ERROR


QueryOutcome = Ready | ParseFailed | ConnectionFailed
