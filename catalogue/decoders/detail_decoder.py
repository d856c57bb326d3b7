# catalogue/decoders/detail_decoder.py

"""Decoder for the single-product detail payload."""

import json
import logging
from typing import Any

from catalogue.models.product import ProductRecord

logger = logging.getLogger("catalogue.decoders")


def decode_product_detail(content: str | None) -> ProductRecord | None:
    """Decode ``[{...full record...}]`` into one record.

    The server wraps the record in a one-element array. An empty array,
    or anything that is not an array of objects, decodes to ``None``.
    Never raises.
    """
    if not content:
        return None
    try:
        data: Any = json.loads(content)
        if not isinstance(data, list):
            raise TypeError("detail payload is not an array")
        if not data:
            logger.info("Product detail payload is an empty array")
            return None
        first = data[0]
        if not isinstance(first, dict):
            raise TypeError("detail element is not an object")
        return ProductRecord.from_wire(first)
    except Exception as e:
        logger.warning(
            "Product detail payload rejected: %s", e, exc_info=True
        )
        return None
