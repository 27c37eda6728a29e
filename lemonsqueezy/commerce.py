"""Orders, order items, products, stores, users and variants."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from .response import RelationshipLinks, _build, _field, _time

_LINKS = RelationshipLinks()
Payload = Optional[Mapping[str, Any]]


@dataclass(frozen=True)
class OrderUrls:
    receipt: str = ""

    @classmethod
    def from_dict(cls, payload: Payload) -> "OrderUrls":
        return _build(cls, payload)


@dataclass(frozen=True)
class OrderFirstItem:
    id: int = 0
    order_id: int = 0
    product_id: int = 0
    variant_id: int = 0
    product_name: str = ""
    variant_name: str = ""
    price: int = 0
    created_at: Optional[datetime] = _time()
    updated_at: Optional[datetime] = _time()
    test_mode: bool = False

    @classmethod
    def from_dict(cls, payload: Payload) -> "OrderFirstItem":
        return _build(cls, payload)


@dataclass(frozen=True)
class OrderAttributes:
    """An order, created when a customer purchases a product."""

    store_id: int = 0
    customer_id: int = 0
    identifier: str = ""
    order_number: int = 0
    user_name: str = ""
    user_email: str = ""
    currency: str = ""
    currency_rate: str = ""
    subtotal: int = 0
    discount_total: int = 0
    tax: int = 0
    total: int = 0
    subtotal_usd: int = 0
    discount_total_usd: int = 0
    tax_usd: int = 0
    total_usd: int = 0
    tax_name: str = ""
    tax_rate: str = ""
    status: str = ""
    status_formatted: str = ""
    refunded: bool = False
    refunded_at: Optional[datetime] = _time()
    subtotal_formatted: str = ""
    discount_total_formatted: str = ""
    tax_formatted: str = ""
    total_formatted: str = ""
    urls: OrderUrls = OrderUrls()
    first_order_item: OrderFirstItem = OrderFirstItem()
    created_at: Optional[datetime] = _time()
    updated_at: Optional[datetime] = _time()

    @classmethod
    def from_dict(cls, payload: Payload) -> "OrderAttributes":
        return _build(cls, payload)


@dataclass(frozen=True)
class OrderRelationships:
    store: RelationshipLinks = _LINKS
    customer: RelationshipLinks = _LINKS
    order_items: RelationshipLinks = _LINKS
    subscriptions: RelationshipLinks = _LINKS
    license_keys: RelationshipLinks = _LINKS
    discount_redemptions: RelationshipLinks = _LINKS

    @classmethod
    def from_dict(cls, payload: Payload) -> "OrderRelationships":
        return _build(cls, payload, hyphenate=True)


@dataclass(frozen=True)
class OrderItemAttributes:
    """A line item of an order."""

    order_id: int = 0
    product_id: int = 0
    variant_id: int = 0
    product_name: str = ""
    variant_name: str = ""
    price: int = 0
    created_at: Optional[datetime] = _time()
    updated_at: Optional[datetime] = _time()

    @classmethod
    def from_dict(cls, payload: Payload) -> "OrderItemAttributes":
        return _build(cls, payload)


@dataclass(frozen=True)
class OrderItemRelationships:
    order: RelationshipLinks = _LINKS
    product: RelationshipLinks = _LINKS
    variant: RelationshipLinks = _LINKS

    @classmethod
    def from_dict(cls, payload: Payload) -> "OrderItemRelationships":
        return _build(cls, payload, hyphenate=True)


@dataclass(frozen=True)
class ProductAttributes:
    """A product sold in a store."""

    store_id: int = 0
    name: str = ""
    slug: str = ""
    description: str = ""
    status: str = ""
    status_formatted: str = ""
    thumb_url: str = ""
    large_thumb_url: str = ""
    price: int = 0
    pay_what_you_want: bool = False
    from_price: Optional[int] = None
    to_price: Optional[int] = None
    buy_now_url: str = ""
    price_formatted: str = ""
    created_at: Optional[datetime] = _time()
    updated_at: Optional[datetime] = _time()

    @classmethod
    def from_dict(cls, payload: Payload) -> "ProductAttributes":
        return _build(cls, payload)


@dataclass(frozen=True)
class ProductRelationships:
    store: RelationshipLinks = _LINKS
    variants: RelationshipLinks = _LINKS

    @classmethod
    def from_dict(cls, payload: Payload) -> "ProductRelationships":
        return _build(cls, payload, hyphenate=True)


@dataclass(frozen=True)
class StoreAttributes:
    """A store; everything else belongs to one."""

    name: str = ""
    slug: str = ""
    domain: str = ""
    url: str = ""
    avatar_url: str = ""
    plan: str = ""
    country: str = ""
    country_nice_name: str = _field("country_nicename", "")
    currency: str = ""
    total_sales: int = 0
    total_revenue: int = 0
    thirty_day_sales: int = 0
    thirty_day_revenue: int = 0
    created_at: Optional[datetime] = _time()
    updated_at: Optional[datetime] = _time()

    @classmethod
    def from_dict(cls, payload: Payload) -> "StoreAttributes":
        return _build(cls, payload)


@dataclass(frozen=True)
class StoreRelationships:
    subscriptions: RelationshipLinks = _LINKS
    orders: RelationshipLinks = _LINKS
    products: RelationshipLinks = _LINKS
    license_keys: RelationshipLinks = _LINKS
    discounts: RelationshipLinks = _LINKS

    @classmethod
    def from_dict(cls, payload: Payload) -> "StoreRelationships":
        return _build(cls, payload, hyphenate=True)


@dataclass(frozen=True)
class UserAttributes:
    """The authenticated user account."""

    name: str = ""
    email: str = ""
    color: str = ""
    avatar_url: str = ""
    has_custom_avatar: bool = False
    created_at: Optional[datetime] = _time("createdAt")
    updated_at: Optional[datetime] = _time("updatedAt")

    @classmethod
    def from_dict(cls, payload: Payload) -> "UserAttributes":
        return _build(cls, payload)


@dataclass(frozen=True)
class VariantAttributes:
    """An option of a product presented at checkout."""

    product_id: int = 0
    name: str = ""
    slug: str = ""
    description: str = ""
    price: int = 0
    is_subscription: bool = False
    interval: Optional[str] = None
    interval_count: Optional[int] = None
    has_free_trial: bool = False
    trial_interval: str = ""
    trial_interval_count: int = 0
    pay_what_you_want: bool = False
    min_price: int = 0
    suggested_price: int = 0
    has_license_keys: bool = False
    license_activation_limit: int = 0
    is_license_limit_unlimited: bool = False
    license_length_value: int = 0
    license_length_unit: str = ""
    is_license_length_unlimited: bool = False
    sort: int = 0
    status: str = ""
    status_formatted: str = ""
    created_at: Optional[datetime] = _time()
    updated_at: Optional[datetime] = _time()

    @classmethod
    def from_dict(cls, payload: Payload) -> "VariantAttributes":
        return _build(cls, payload)


@dataclass(frozen=True)
class VariantRelationships:
    product: RelationshipLinks = _LINKS

    @classmethod
    def from_dict(cls, payload: Payload) -> "VariantRelationships":
        return _build(cls, payload, hyphenate=True)