# catalogue/models/product_collection.py

"""Ordered, id-unique container of product records."""

import logging
from collections.abc import Iterable, Iterator

from catalogue.models.product import ProductRecord

logger = logging.getLogger("catalogue.models")


class ProductCollection:
    """Product records in first-seen order, indexed by id.

    Records are reachable by position (:meth:`at`) or by id
    (:meth:`by_id`). Importing never overwrites an existing entry; the
    stored instances are updated in place by the merge engine instead.

    No locking: mutate from one context only (the callback context of
    the dispatcher).
    """

    def __init__(
        self, records: Iterable[ProductRecord] | None = None,
    ) -> None:
        self._order: list[str] = []
        self._index: dict[str, ProductRecord] = {}
        if records is not None:
            self.import_all(records)

    @property
    def size(self) -> int:
        """Number of stored records."""
        return len(self._order)

    def import_all(self, records: Iterable[ProductRecord]) -> int:
        """Append records whose id is present and not yet stored.

        Returns the number of records actually added.
        """
        added = 0
        skipped = 0
        for record in records:
            product_id = record.id
            if product_id is None or product_id in self._index:
                skipped += 1
                continue
            self._order.append(product_id)
            self._index[product_id] = record
            added += 1
        if skipped:
            logger.debug(
                "Import skipped %d records (missing or duplicate id)",
                skipped,
            )
        return added

    def at(self, index: int) -> ProductRecord:
        """Return the record at *index* in insertion order.

        Raises ``IndexError`` when *index* is outside ``[0, size)``;
        negative positions are not accepted.
        """
        if index < 0 or index >= len(self._order):
            raise IndexError(
                f"ProductCollection index {index} out of range "
                f"(size={len(self._order)})"
            )
        return self._index[self._order[index]]

    def by_id(self, product_id: str) -> ProductRecord | None:
        """Return the record with *product_id*, or ``None``."""
        return self._index.get(product_id)

    def ids(self) -> list[str]:
        """Stored ids in insertion order."""
        return list(self._order)

    def __getitem__(self, index: int) -> ProductRecord:
        return self.at(index)

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[ProductRecord]:
        for product_id in self._order:
            yield self._index[product_id]

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._index
