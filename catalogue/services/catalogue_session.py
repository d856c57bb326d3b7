# catalogue/services/catalogue_session.py

"""In-memory catalogue for one browsing session."""

import logging
from dataclasses import dataclass, field

from catalogue.client.dispatcher import QueryDispatcher, QueryKind
from catalogue.models.product import (
    MUTABLE_FIELDS,
    FieldSet,
    ProductRecord,
)
from catalogue.models.product_collection import ProductCollection
from catalogue.models.query_outcome import (
    NO_NETWORK,
    ConnectionFailed,
    ParseFailed,
    QueryOutcome,
    Ready,
)
from catalogue.reconcile.field_merge import merge_records, missing_fields

logger = logging.getLogger("catalogue.session")

LOAD_FAILED = "load_failed"
NO_CONNECTION = "no_connection"

_LOAD_FAILED_MESSAGE = "Could not load products."


@dataclass
class ListState:
    """What a list screen should render."""

    is_loading: bool = False
    products: ProductCollection | None = None
    error: str | None = None
    error_kind: str | None = None  # LOAD_FAILED or NO_CONNECTION


@dataclass
class DetailState:
    """What a detail screen should render."""

    is_loading: bool = False
    product: ProductRecord | None = None
    error: str | None = None
    error_kind: str | None = None  # LOAD_FAILED or NO_CONNECTION
    fresh_fields: FieldSet = field(default_factory=frozenset)


def _failure(outcome: QueryOutcome) -> tuple[str, str]:
    """Map a failed outcome to ``(error_kind, message)``."""
    if isinstance(outcome, ConnectionFailed):
        return NO_CONNECTION, outcome.message or NO_NETWORK
    return LOAD_FAILED, _LOAD_FAILED_MESSAGE


class CatalogueSession:
    """Holds the product list and fills in details on demand.

    The list fetch seeds :attr:`products`; every detail fetch is merged
    into the stored record in place and shrinks that record's missing
    field set. Details are only requested for records with missing
    fields.
    """

    def __init__(self, dispatcher: QueryDispatcher | None = None) -> None:
        self.dispatcher = dispatcher or QueryDispatcher()
        self.products = ProductCollection()
        self._missing: dict[str, FieldSet] = {}
        self.list_state = ListState()
        self.detail_state = DetailState()

    def missing_for(self, product_id: str) -> FieldSet | None:
        """Fields still unknown for *product_id*, ``None`` if unknown id."""
        return self._missing.get(product_id)

    def needs_detail(self, product_id: str) -> bool:
        """True unless the stored record is already complete."""
        missing = self._missing.get(product_id)
        return missing is None or bool(missing)

    def _track(self, records: list[ProductRecord]) -> None:
        for record in records:
            if record.id is not None and record.id not in self._missing:
                self._missing[record.id] = missing_fields(record)

    async def load_list(self) -> ListState:
        """Fetch the full list and import it into :attr:`products`."""
        self.list_state = ListState(is_loading=True)
        outcome = await self.dispatcher.fetch(QueryKind.LIST)

        if isinstance(outcome, Ready):
            records: list[ProductRecord] = outcome.payload
            added = self.products.import_all(records)
            self._track(records)
            logger.info(
                "Product list loaded: %d received, %d new, %d total",
                len(records),
                added,
                self.products.size,
            )
            self.list_state = ListState(products=self.products)
        else:
            kind, message = _failure(outcome)
            logger.warning("Product list failed (%s): %s", kind, message)
            self.list_state = ListState(error=message, error_kind=kind)
        return self.list_state

    async def load_detail(self, product_id: str) -> DetailState:
        """Complete the record for *product_id* from the detail endpoint.

        No request is made when the stored record has no missing fields.
        """
        stored = self.products.by_id(product_id)
        if stored is not None and not self.needs_detail(product_id):
            logger.debug("Product %s already complete", product_id)
            self.detail_state = DetailState(product=stored)
            return self.detail_state

        self.detail_state = DetailState(is_loading=True, product=stored)
        outcome = await self.dispatcher.fetch(
            QueryKind.DETAIL, [product_id]
        )

        if not isinstance(outcome, Ready):
            kind, message = _failure(outcome)
            logger.warning(
                "Product %s detail failed (%s): %s",
                product_id,
                kind,
                message,
            )
            return self._apply_failure(stored, outcome)

        detail: ProductRecord = outcome.payload
        if detail.id != product_id:
            logger.warning(
                "Detail for %s came back with id %r, ignored",
                product_id,
                detail.id,
            )
            return self._apply_failure(stored, ParseFailed())

        if stored is None:
            self.products.import_all([detail])
            self._track([detail])
            fresh = frozenset(MUTABLE_FIELDS) - missing_fields(detail)
            self.detail_state = DetailState(
                product=detail, fresh_fields=fresh
            )
            return self.detail_state

        fresh = merge_records(stored, detail)
        self._missing[product_id] = (
            self._missing.get(product_id, missing_fields(stored)) - fresh
        )
        logger.info(
            "Product %s merged %d fields, %d still missing",
            product_id,
            len(fresh),
            len(self._missing[product_id]),
        )
        self.detail_state = DetailState(product=stored, fresh_fields=fresh)
        return self.detail_state

    def _apply_failure(
        self, stored: ProductRecord | None, outcome: QueryOutcome,
    ) -> DetailState:
        kind, message = _failure(outcome)
        self.detail_state = DetailState(
            product=stored, error=message, error_kind=kind
        )
        return self.detail_state
