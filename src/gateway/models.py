# provide dataclass models for the remote store payloads

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from gateway.errors import NetworkError


def _require(payload: Mapping[str, Any], *keys: str) -> Any:
    """Return the first key present in payload, raise NetworkError otherwise."""
    if not isinstance(payload, Mapping):
        raise NetworkError(f"expected a JSON object, got {type(payload).__name__}")
    for key in keys:
        if key in payload:
            return payload[key]
    raise NetworkError(f"backend returned invalid data: missing '{keys[0]}'")


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str
    cost: float
    rating: int  # 0..5
    image: str  # url

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> Product:
        # the store sends mongo style "_id"
        try:
            return cls(
                id=str(_require(payload, "_id", "id")),
                name=str(_require(payload, "name")),
                category=str(payload.get("category", "")),
                cost=float(_require(payload, "cost")),
                rating=int(payload.get("rating", 0)),
                image=str(payload.get("image", "")),
            )
        except (TypeError, ValueError) as e:
            raise NetworkError(f"backend returned invalid product: {e}") from e


@dataclass(frozen=True)
class RawCartLine:
    product_id: str
    quantity: int

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> RawCartLine:
        try:
            return cls(
                product_id=str(_require(payload, "productId")),
                quantity=int(_require(payload, "qty", "quantity")),
            )
        except (TypeError, ValueError) as e:
            raise NetworkError(f"backend returned invalid cart line: {e}") from e


@dataclass(frozen=True)
class EnrichedCartLine:
    id: str
    name: str
    category: str
    cost: float
    rating: int
    image: str
    quantity: int

    @classmethod
    def from_product(cls, product: Product, quantity: int) -> EnrichedCartLine:
        return cls(
            id=product.id,
            name=product.name,
            category=product.category,
            cost=product.cost,
            rating=product.rating,
            image=product.image,
            quantity=quantity,
        )

    @property
    def product_id(self) -> str:
        return self.id

    @property
    def subtotal(self) -> float:
        return self.cost * self.quantity
