# catalogue/client/dispatcher.py

"""Single dispatch point for catalogue queries.

A query kind is looked up in :data:`QUERY_ROUTES`, which names the
endpoint path, the query parameters it takes and the default decoder
for its body. :meth:`QueryDispatcher.fetch` performs the round trip and
returns exactly one :data:`QueryOutcome`; :meth:`QueryDispatcher.dispatch`
schedules the same work on the running event loop and reports the
outcome through one of three callbacks.

Outcome rules, in order:

1. the transport raises -> ``ConnectionFailed(<exception text>)``
2. non-2xx status       -> ``ConnectionFailed(<reason phrase>)``
3. empty body           -> ``ParseFailed``
4. decoder raises or returns ``None`` -> ``ParseFailed``
5. otherwise            -> ``Ready(<decoded value>)``
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from catalogue.client.transport import CatalogueTransport
from catalogue.config.settings import Settings
from catalogue.decoders.detail_decoder import decode_product_detail
from catalogue.decoders.list_decoder import decode_product_list
from catalogue.models.query_outcome import (
    NO_NETWORK,
    UNKNOWN_ERROR,
    ConnectionFailed,
    ParseFailed,
    QueryOutcome,
    Ready,
)
from catalogue.services.connectivity import has_network_route

logger = logging.getLogger("catalogue.dispatcher")

Decoder = Callable[[str], Any]


class QueryKind(Enum):
    """Queries the catalogue server answers."""

    LIST = "list"
    DETAIL = "detail"


class QueryContractError(ValueError):
    """A query was built in a way the dispatcher cannot serve."""


class UnsupportedQueryError(QueryContractError):
    """The query kind has no route."""


class MissingParameterError(QueryContractError):
    """A query that needs a parameter was dispatched without one."""


@dataclass(frozen=True)
class QueryRoute:
    """Endpoint, parameter names and default decoder for a query kind."""

    path: str
    param_names: tuple[str, ...]
    decoder: Decoder


QUERY_ROUTES: dict[QueryKind, QueryRoute] = {
    QueryKind.LIST: QueryRoute(
        path=Settings.LIST_PATH,
        param_names=(),
        decoder=decode_product_list,
    ),
    QueryKind.DETAIL: QueryRoute(
        path=Settings.DETAIL_PATH,
        param_names=(Settings.DETAIL_ID_PARAM,),
        decoder=decode_product_detail,
    ),
}


def _status_message(resp: Any) -> str:
    """Human-readable status text for a failed response."""
    reason = str(getattr(resp, "reason", "") or "").strip()
    if reason:
        return reason
    return f"HTTP {resp.status_code}"


def _exception_message(exc: BaseException) -> str:
    """Diagnostic text for a transport exception."""
    text = str(exc).strip()
    return text or UNKNOWN_ERROR


def _log_callback_failure(task: "asyncio.Task[None]") -> None:
    """Report an exception raised by a dispatch callback."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Dispatch callback failed: %s", exc, exc_info=exc)


class QueryDispatcher:
    """Routes queries to the catalogue endpoints and classifies results.

    Args:
        transport: Object with a blocking ``get(path, params)`` method.
        network_available: Zero-argument callable consulted before each
            request; when it returns ``False`` no request is made.
    """

    def __init__(
        self,
        transport: CatalogueTransport | None = None,
        network_available: Callable[[], bool] | None = None,
    ) -> None:
        self.transport = transport or CatalogueTransport()
        self.network_available = network_available or has_network_route

    # ── Contract checks ─────────────────────────────────

    def resolve(
        self,
        query_kind: QueryKind,
        params: Sequence[str] | None = None,
    ) -> tuple[QueryRoute, dict[str, str]]:
        """Look up the route for *query_kind* and bind *params* to it.

        Raises:
            UnsupportedQueryError: *query_kind* has no route.
            MissingParameterError: fewer parameters than the route needs.
            QueryContractError: more parameters than the route takes.
        """
        route = (
            QUERY_ROUTES.get(query_kind)
            if isinstance(query_kind, QueryKind)
            else None
        )
        if route is None:
            raise UnsupportedQueryError(
                f"Unsupported query type: {query_kind!r}"
            )

        values = [p for p in (params or []) if p]
        needed = len(route.param_names)
        if len(values) < needed:
            raise MissingParameterError(
                f"{query_kind.value} query requires "
                f"{', '.join(route.param_names)}"
            )
        if len(values) > needed:
            raise QueryContractError(
                f"{query_kind.value} query takes {needed} "
                f"parameter(s), got {len(values)}"
            )
        return route, dict(zip(route.param_names, values))

    # ── Outcome classification ──────────────────────────

    @staticmethod
    def _decode(decoder: Decoder, content: str) -> Any:
        """Run *decoder*, mapping any escaped exception to ``None``."""
        try:
            return decoder(content)
        except Exception as exc:
            logger.warning(
                "Decoder %s raised: %s",
                getattr(decoder, "__name__", decoder),
                exc,
                exc_info=True,
            )
            return None

    def classify(self, resp: Any, decoder: Decoder) -> QueryOutcome:
        """Turn a received response into an outcome (rules 2 to 5)."""
        if not 200 <= resp.status_code < 300:
            message = _status_message(resp)
            logger.warning(
                "Server answered HTTP %d: %s", resp.status_code, message
            )
            return ConnectionFailed(message)

        content: str = resp.text or ""
        if not content.strip():
            logger.warning("Server answered HTTP %d with an empty body",
                           resp.status_code)
            return ParseFailed()

        value = self._decode(decoder, content)
        if value is None:
            logger.warning("Response body could not be decoded")
            return ParseFailed()
        return Ready(value)

    # ── Execution ───────────────────────────────────────

    async def _execute(
        self,
        route: QueryRoute,
        query: dict[str, str],
        decoder: Decoder | None,
    ) -> QueryOutcome:
        if not self.network_available():
            logger.info("No network, %s not requested", route.path)
            return ConnectionFailed(NO_NETWORK)

        try:
            resp = await asyncio.to_thread(
                self.transport.get, route.path, query or None
            )
        except Exception as exc:
            logger.warning(
                "Request to %s failed: %s", route.path, exc, exc_info=True
            )
            return ConnectionFailed(_exception_message(exc))

        return self.classify(resp, decoder or route.decoder)

    async def fetch(
        self,
        query_kind: QueryKind,
        params: Sequence[str] | None = None,
        decoder: Decoder | None = None,
    ) -> QueryOutcome:
        """Perform one query and return its outcome.

        Contract errors are raised when the coroutine starts, before
        any request is made.
        """
        route, query = self.resolve(query_kind, params)
        return await self._execute(route, query, decoder)

    def dispatch(
        self,
        query_kind: QueryKind,
        params: Sequence[str] | None,
        on_ready: Callable[[Any], None],
        on_parse_error: Callable[[], None],
        on_connection_error: Callable[[str], None],
        decoder: Decoder | None = None,
    ) -> "asyncio.Task[None]":
        """Schedule one query on the running loop and return its task.

        Contract errors raise here, synchronously. Exactly one callback
        is later invoked on the loop thread; an exception it raises is
        logged and left on the task.
        """
        route, query = self.resolve(query_kind, params)

        async def run() -> None:
            outcome = await self._execute(route, query, decoder)
            deliver(
                outcome, on_ready, on_parse_error, on_connection_error
            )

        task = asyncio.get_running_loop().create_task(run())
        task.add_done_callback(_log_callback_failure)
        return task


def deliver(
    outcome: QueryOutcome,
    on_ready: Callable[[Any], None],
    on_parse_error: Callable[[], None],
    on_connection_error: Callable[[str], None],
) -> None:
    """Invoke the one callback matching *outcome*."""
    if isinstance(outcome, Ready):
        on_ready(outcome.payload)
    elif isinstance(outcome, ParseFailed):
        on_parse_error()
    else:
        on_connection_error(outcome.message)
