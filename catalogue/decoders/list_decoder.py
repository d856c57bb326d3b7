# catalogue/decoders/list_decoder.py

"""Decoder for the clustered product-list payload."""

import json
import logging
from typing import Any

from catalogue.models.product import ProductRecord

logger = logging.getLogger("catalogue.decoders")


def _parse_cluster(cluster: dict[str, Any]) -> list[ProductRecord]:
    """Flatten one cluster, stamping every item with the cluster tag."""
    raw_tag = cluster.get("tag")
    tag = None if raw_tag is None else str(raw_tag)
    items: list[dict[str, Any]] = cluster.get("items") or []
    if not isinstance(items, list):
        raise TypeError("cluster 'items' is not a list")
    records: list[ProductRecord] = []
    for item in items:
        if not isinstance(item, dict):
            raise TypeError("cluster item is not an object")
        records.append(ProductRecord.from_wire(item, tag=tag))
    return records


def decode_product_list(content: str | None) -> list[ProductRecord] | None:
    """Decode ``{"clusters": [{"tag": ..., "items": [...]}]}``.

    Returns one record per item in payload order, or ``None`` when the
    payload does not have the clustered shape. Never raises.
    """
    if not content:
        return None
    try:
        data: Any = json.loads(content)
        clusters = data["clusters"]
        if not isinstance(clusters, list):
            raise TypeError("'clusters' is not a list")
        products: list[ProductRecord] = []
        for cluster in clusters:
            if not isinstance(cluster, dict):
                raise TypeError("cluster is not an object")
            products.extend(_parse_cluster(cluster))
        return products
    except Exception as e:
        logger.warning(
            "Product list payload rejected: %s", e, exc_info=True
        )
        return None
