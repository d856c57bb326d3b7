# catalogue/models/product.py

"""Product record model and its static field schema."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

# Ordered schema of every product field; ``id`` first.
PRODUCT_FIELDS: tuple[str, ...] = (
    "id",
    "price",
    "title",
    "description",
    "tag",
    "size",
    "allergy_information",
    "image_url",
)

# Fields a merge may overwrite.
MUTABLE_FIELDS: tuple[str, ...] = PRODUCT_FIELDS[1:]

# Attribute name -> name used in the JSON payloads.
WIRE_NAMES: dict[str, str] = {
    "id": "id",
    "price": "price",
    "title": "title",
    "description": "description",
    "tag": "tag",
    "size": "size",
    "allergy_information": "allergyInformation",
    "image_url": "imageUrl",
}

_FROM_WIRE: dict[str, str] = {
    wire: attr for attr, wire in WIRE_NAMES.items()
}

FieldSet = frozenset[str]


def normalise_fields(names: Iterable[str], strict: bool = True) -> FieldSet:
    """Map attribute or wire field names onto schema attribute names.

    Raises ``ValueError`` for a name outside the schema, unless
    *strict* is false, in which case such names are dropped.
    """
    result: set[str] = set()
    for name in names:
        if name in WIRE_NAMES:
            result.add(name)
        elif name in _FROM_WIRE:
            result.add(_FROM_WIRE[name])
        elif strict:
            raise ValueError(f"Unknown product field: {name!r}")
    return frozenset(result)


def _as_text(value: Any) -> str | None:
    """Coerce a JSON scalar to ``str``, keeping ``None`` as absent."""
    if value is None:
        return None
    return str(value)


@dataclass
class ProductRecord:
    """Part or all of the known information about one product.

    Every field except ``id`` may be filled in later by a merge. Once
    ``id`` holds a value it cannot be changed.
    """

    id: str | None = None
    price: str | None = None
    title: str | None = None
    description: str | None = None
    tag: str | None = None
    size: str | None = None
    allergy_information: str | None = None
    image_url: str | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id":
            current = getattr(self, "id", None)
            if current is not None and value != current:
                raise AttributeError(
                    f"ProductRecord id is immutable (id={current!r})"
                )
        super().__setattr__(name, value)

    @classmethod
    def from_wire(
        cls,
        payload: dict[str, Any],
        tag: str | None = None,
    ) -> "ProductRecord":
        """Build a record from a JSON object using wire field names.

        Unknown keys are ignored; ``tag`` overrides any tag in *payload*.
        """
        values: dict[str, str | None] = {
            attr: _as_text(payload.get(wire))
            for attr, wire in WIRE_NAMES.items()
        }
        if tag is not None:
            values["tag"] = tag
        return cls(**values)

    def to_wire(self) -> dict[str, str | None]:
        """Serialise to a dict keyed by wire field names."""
        return {
            wire: getattr(self, attr)
            for attr, wire in WIRE_NAMES.items()
        }
