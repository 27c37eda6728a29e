"""API clients for orders, order items, products, stores, variants and users."""

from __future__ import annotations

import json
from typing import Any, Callable, Mapping, Optional

from .commerce import (
    OrderAttributes,
    OrderItemAttributes,
    OrderItemRelationships,
    OrderRelationships,
    ProductAttributes,
    ProductRelationships,
    StoreAttributes,
    StoreRelationships,
    UserAttributes,
    VariantAttributes,
    VariantRelationships,
)
from .response import Document, DocumentList
from .transport import Transport

_Parser = Callable[[Mapping[str, Any]], Any]


def _one(
    transport: Transport, path: str, attributes: _Parser, relationships: Optional[_Parser] = None
) -> Document:
    body = transport.request("GET", path).body
    return Document.from_dict(json.loads(body), attributes, relationships)


def _many(
    transport: Transport, path: str, attributes: _Parser, relationships: Optional[_Parser] = None
) -> DocumentList:
    body = transport.request("GET", path).body
    return DocumentList.from_dict(json.loads(body), attributes, relationships)


class OrdersService:
    """Client for the /v1/orders endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get(self, order_id: str) -> Document[OrderAttributes, OrderRelationships]:
        """Return the order with the given id."""
        return _one(
            self._transport,
            f"/v1/orders/{order_id}",
            OrderAttributes.from_dict,
            OrderRelationships.from_dict,
        )

    def list(self) -> DocumentList[OrderAttributes, OrderRelationships]:
        """Return a page of orders."""
        return _many(
            self._transport, "/v1/orders", OrderAttributes.from_dict, OrderRelationships.from_dict
        )


class OrderItemsService:
    """Client for the /v1/order-items endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get(self, order_item_id: str) -> Document[OrderItemAttributes, OrderItemRelationships]:
        """Return the order item with the given id."""
        return _one(
            self._transport,
            f"/v1/order-items/{order_item_id}",
            OrderItemAttributes.from_dict,
            OrderItemRelationships.from_dict,
        )

    def list(self) -> DocumentList[OrderItemAttributes, OrderItemRelationships]:
        """Return a page of order items."""
        return _many(
            self._transport,
            "/v1/order-items",
            OrderItemAttributes.from_dict,
            OrderItemRelationships.from_dict,
        )


class ProductsService:
    """Client for the /v1/products endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get(self, product_id: str) -> Document[ProductAttributes, ProductRelationships]:
        """Return the product with the given id."""
        return _one(
            self._transport,
            f"/v1/products/{product_id}",
            ProductAttributes.from_dict,
            ProductRelationships.from_dict,
        )

    def list(self) -> DocumentList[ProductAttributes, ProductRelationships]:
        """Return a page of products."""
        return _many(
            self._transport,
            "/v1/products",
            ProductAttributes.from_dict,
            ProductRelationships.from_dict,
        )


class StoresService:
    """Client for the /v1/stores endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get(self, store_id: str) -> Document[StoreAttributes, StoreRelationships]:
        """Return the store with the given id."""
        return _one(
            self._transport,
            f"/v1/stores/{store_id}",
            StoreAttributes.from_dict,
            StoreRelationships.from_dict,
        )

    def list(self) -> DocumentList[StoreAttributes, StoreRelationships]:
        """Return a page of stores."""
        return _many(
            self._transport, "/v1/stores/", StoreAttributes.from_dict, StoreRelationships.from_dict
        )


class VariantsService:
    """Client for the /v1/variants endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get(self, variant_id: str) -> Document[VariantAttributes, VariantRelationships]:
        """Return the variant with the given id."""
        return _one(
            self._transport,
            f"/v1/variants/{variant_id}",
            VariantAttributes.from_dict,
            VariantRelationships.from_dict,
        )

    def list(self) -> DocumentList[VariantAttributes, VariantRelationships]:
        """Return a page of variants."""
        return _many(
            self._transport,
            "/v1/variants",
            VariantAttributes.from_dict,
            VariantRelationships.from_dict,
        )


class UsersService:
    """Client for the /v1/users endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def me(self) -> Document[UserAttributes, None]:
        """Return the currently authenticated user."""
        return _one(self._transport, "/v1/users/me", UserAttributes.from_dict)