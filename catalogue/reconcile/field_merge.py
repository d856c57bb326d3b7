# catalogue/reconcile/field_merge.py

"""Field-level reconciliation of partial product records."""

import logging
from collections.abc import Iterable

from catalogue.models.product import (
    MUTABLE_FIELDS,
    PRODUCT_FIELDS,
    FieldSet,
    ProductRecord,
    normalise_fields,
)

logger = logging.getLogger("catalogue.reconcile")


def merge_records(
    target: ProductRecord,
    source: ProductRecord,
    allowed_fields: Iterable[str] | None = None,
) -> FieldSet:
    """Copy every non-``None`` field of *source* onto *target*.

    A source value overwrites the target value even when the target
    already holds one (newest fetch wins). ``id`` is never written. When
    *allowed_fields* is given (attribute or wire names), only those
    fields are considered; names outside the schema are ignored.

    Records with different ids, or without an id, are left untouched.

    Returns:
        Every field written by this call, whether or not the stored
        value differed. Re-applying the same *source* reports the same
        set and leaves *target* as it was.
    """
    if target.id is None or source.id is None or target.id != source.id:
        logger.debug(
            "Merge skipped: ids differ (%r vs %r)", target.id, source.id
        )
        return frozenset()

    if allowed_fields is None:
        eligible = MUTABLE_FIELDS
    else:
        allowed = normalise_fields(allowed_fields, strict=False)
        eligible = tuple(f for f in MUTABLE_FIELDS if f in allowed)

    written: set[str] = set()
    for name in eligible:
        value = getattr(source, name)
        if value is None:
            continue
        setattr(target, name, value)
        written.add(name)

    if written:
        logger.debug(
            "Merged %d fields into product %s: %s",
            len(written),
            target.id,
            sorted(written),
        )
    return frozenset(written)


def missing_fields(record: ProductRecord) -> FieldSet:
    """Return every schema field of *record* that is still ``None``."""
    return frozenset(
        name for name in PRODUCT_FIELDS
        if getattr(record, name) is None
    )


def is_complete(record: ProductRecord) -> bool:
    """True when no schema field of *record* is missing."""
    return not missing_fields(record)
