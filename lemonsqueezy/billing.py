"""Subscriptions, subscription items and invoices, webhooks and webhook payloads."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar, Union

from .commerce import OrderAttributes, OrderRelationships
from .response import JsonApi, RelationshipLinks, ResourceData, parse_time

A = TypeVar("A")
R = TypeVar("R")

WebhookPayload = Union[bytes, bytearray, str, Mapping[str, Any]]


def _rel(payload: Mapping[str, Any], key: str) -> RelationshipLinks:
    return RelationshipLinks.from_dict(payload.get(key))


def _format_time(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as an RFC 3339 timestamp, trimming trailing zeros."""
    if value is None:
        return None
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if offset is None or offset == timedelta(0):
        return text + "Z"
    return text + value.isoformat()[-6:]


@dataclass(frozen=True)
class SubscriptionInvoiceUrls:
    invoice_url: str = ""

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "SubscriptionInvoiceUrls":
        payload = payload or {}
        return cls(invoice_url=payload.get("invoice_url", ""))


@dataclass(frozen=True)
class SubscriptionInvoiceAttributes:
    """The invoice issued for a subscription payment."""

    store_id: int = 0
    subscription_id: int = 0
    billing_reason: str = ""
    card_brand: str = ""
    card_last_four: str = ""
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
    status: str = ""
    status_formatted: str = ""
    refunded: bool = False
    refunded_at: Optional[datetime] = None
    subtotal_formatted: str = ""
    discount_total_formatted: str = ""
    tax_formatted: str = ""
    total_formatted: str = ""
    urls: SubscriptionInvoiceUrls = field(default_factory=SubscriptionInvoiceUrls)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    test_mode: bool = False

    @classmethod
    def from_dict(
        cls, payload: Optional[Mapping[str, Any]]
    ) -> "SubscriptionInvoiceAttributes":
        payload = payload or {}
        return cls(
            store_id=payload.get("store_id", 0),
            subscription_id=payload.get("subscription_id", 0),
            billing_reason=payload.get("billing_reason", ""),
            card_brand=payload.get("card_brand", ""),
            card_last_four=payload.get("card_last_four", ""),
            currency=payload.get("currency", ""),
            currency_rate=payload.get("currency_rate", ""),
            subtotal=payload.get("subtotal", 0),
            discount_total=payload.get("discount_total", 0),
            tax=payload.get("tax", 0),
            total=payload.get("total", 0),
            subtotal_usd=payload.get("subtotal_usd", 0),
            discount_total_usd=payload.get("discount_total_usd", 0),
            tax_usd=payload.get("tax_usd", 0),
            total_usd=payload.get("total_usd", 0),
            status=payload.get("status", ""),
            status_formatted=payload.get("status_formatted", ""),
            refunded=payload.get("refunded", False),
            refunded_at=parse_time(payload.get("refunded_at")),
            subtotal_formatted=payload.get("subtotal_formatted", ""),
            discount_total_formatted=payload.get("discount_total_formatted", ""),
            tax_formatted=payload.get("tax_formatted", ""),
            total_formatted=payload.get("total_formatted", ""),
            urls=SubscriptionInvoiceUrls.from_dict(payload.get("urls")),
            created_at=parse_time(payload.get("created_at")),
            updated_at=parse_time(payload.get("updated_at")),
            test_mode=payload.get("test_mode", False),
        )


@dataclass(frozen=True)
class SubscriptionInvoiceRelationships:
    store: RelationshipLinks = field(default_factory=RelationshipLinks)
    subscription: RelationshipLinks = field(default_factory=RelationshipLinks)

    @classmethod
    def from_dict(
        cls, payload: Optional[Mapping[str, Any]]
    ) -> "SubscriptionInvoiceRelationships":
        payload = payload or {}
        return cls(store=_rel(payload, "store"), subscription=_rel(payload, "subscription"))


@dataclass(frozen=True)
class SubscriptionItem:
    """Links a price to a subscription, with quantity information."""

    subscription_id: int = 0
    price_id: int = 0
    quantity: int = 0
    is_usage_based: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "SubscriptionItem":
        payload = payload or {}
        return cls(
            subscription_id=payload.get("subscription_id", 0),
            price_id=payload.get("price_id", 0),
            quantity=payload.get("quantity", 0),
            is_usage_based=payload.get("is_usage_based", False),
            created_at=parse_time(payload.get("created_at")),
            updated_at=parse_time(payload.get("updated_at")),
        )


@dataclass
class SubscriptionItemUpdateAttributes:
    """Attributes that can be changed on a subscription item."""

    quantity: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON attributes, leaving out a zero quantity."""
        return {"quantity": self.quantity} if self.quantity else {}


@dataclass
class SubscriptionItemUpdateParams:
    """Parameters for updating a subscription item."""

    id: str = ""
    attributes: SubscriptionItemUpdateAttributes = field(
        default_factory=SubscriptionItemUpdateAttributes
    )


@dataclass
class SubscriptionItemListParams:
    """Filters for listing subscription items."""

    subscription_id: str = ""
    price_id: str = ""

    def to_query(self) -> Dict[str, str]:
        """Return the query parameters for the filters that are set."""
        filters = {"subscription_id": self.subscription_id, "price_id": self.price_id}
        return {f"filter[{name}]": value for name, value in filters.items() if value}


@dataclass(frozen=True)
class CurrentUsage:
    """Usage of a usage-based subscription item in the current billing period."""

    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None
    quantity: int = 0
    interval_unit: str = ""
    interval_quantity: int = 0

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "CurrentUsage":
        payload = payload or {}
        return cls(
            period_start=parse_time(payload.get("period_start")),
            period_end=parse_time(payload.get("period_end")),
            quantity=payload.get("quantity", 0),
            interval_unit=payload.get("interval_unit", ""),
            interval_quantity=payload.get("interval_quantity", 0),
        )


@dataclass(frozen=True)
class CurrentUsageResponse:
    """The document returned for a subscription item's current usage."""

    jsonapi: JsonApi = field(default_factory=JsonApi)
    meta: CurrentUsage = field(default_factory=CurrentUsage)

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "CurrentUsageResponse":
        payload = payload or {}
        return cls(
            jsonapi=JsonApi.from_dict(payload.get("jsonapi")),
            meta=CurrentUsage.from_dict(payload.get("meta")),
        )


@dataclass(frozen=True)
class SubscriptionItemRelationships:
    subscription: RelationshipLinks = field(default_factory=RelationshipLinks)
    price: RelationshipLinks = field(default_factory=RelationshipLinks)
    usage_records: RelationshipLinks = field(default_factory=RelationshipLinks)

    @classmethod
    def from_dict(
        cls, payload: Optional[Mapping[str, Any]]
    ) -> "SubscriptionItemRelationships":
        payload = payload or {}
        return cls(
            subscription=_rel(payload, "subscription"),
            price=_rel(payload, "price"),
            usage_records=_rel(payload, "usage-records"),
        )


@dataclass(frozen=True)
class SubscriptionPause:
    """How a subscription's payment collection is paused."""

    mode: str = ""
    resumes_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "SubscriptionPause":
        payload = payload or {}
        return cls(
            mode=payload.get("mode", ""),
            resumes_at=parse_time(payload.get("resumes_at")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode, "resumes_at": _format_time(self.resumes_at)}


@dataclass(frozen=True)
class SubscriptionURLs:
    """Customer-facing URLs for managing a subscription."""

    update_payment_method: str = ""
    customer_portal: str = ""

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "SubscriptionURLs":
        payload = payload or {}
        return cls(
            update_payment_method=payload.get("update_payment_method", ""),
            customer_portal=payload.get("customer_portal", ""),
        )


@dataclass(frozen=True)
class SubscriptionFirstItem(SubscriptionItem):
    """The first subscription item belonging to a subscription."""

    id: int = 0

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "SubscriptionFirstItem":
        payload = payload or {}
        item = SubscriptionItem.from_dict(payload)
        return cls(
            id=payload.get("id", 0),
            subscription_id=item.subscription_id,
            price_id=item.price_id,
            quantity=item.quantity,
            is_usage_based=item.is_usage_based,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


@dataclass(frozen=True)
class Subscription:
    """A recurring subscription created when a subscription product is bought."""

    store_id: int = 0
    customer_id: int = 0
    order_id: int = 0
    order_item_id: int = 0
    product_id: int = 0
    variant_id: int = 0
    product_name: str = ""
    variant_name: str = ""
    user_name: str = ""
    user_email: str = ""
    status: str = ""
    status_formatted: str = ""
    card_brand: str = ""
    card_last_four: str = ""
    pause: Optional[SubscriptionPause] = None
    cancelled: bool = False
    trial_ends_at: Optional[datetime] = None
    billing_anchor: int = 0
    first_subscription_item: Optional[SubscriptionFirstItem] = None
    urls: SubscriptionURLs = field(default_factory=SubscriptionURLs)
    renews_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    test_mode: bool = False

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "Subscription":
        payload = payload or {}
        pause = payload.get("pause")
        first_item = payload.get("first_subscription_item")
        return cls(
            store_id=payload.get("store_id", 0),
            customer_id=payload.get("customer_id", 0),
            order_id=payload.get("order_id", 0),
            order_item_id=payload.get("order_item_id", 0),
            product_id=payload.get("product_id", 0),
            variant_id=payload.get("variant_id", 0),
            product_name=payload.get("product_name", ""),
            variant_name=payload.get("variant_name", ""),
            user_name=payload.get("user_name", ""),
            user_email=payload.get("user_email", ""),
            status=payload.get("status", ""),
            status_formatted=payload.get("status_formatted", ""),
            card_brand=payload.get("card_brand", ""),
            card_last_four=payload.get("card_last_four", ""),
            pause=None if pause is None else SubscriptionPause.from_dict(pause),
            cancelled=payload.get("cancelled", False),
            trial_ends_at=parse_time(payload.get("trial_ends_at")),
            billing_anchor=payload.get("billing_anchor", 0),
            first_subscription_item=None
            if first_item is None
            else SubscriptionFirstItem.from_dict(first_item),
            urls=SubscriptionURLs.from_dict(payload.get("urls")),
            renews_at=parse_time(payload.get("renews_at")),
            ends_at=parse_time(payload.get("ends_at")),
            created_at=parse_time(payload.get("created_at")),
            updated_at=parse_time(payload.get("updated_at")),
            test_mode=payload.get("test_mode", False),
        )


@dataclass
class SubscriptionUpdateAttributes:
    """Attributes that can be changed on a subscription."""

    product_id: int = 0
    variant_id: int = 0
    billing_anchor: int = 0
    cancelled: bool = False
    pause: Optional[SubscriptionPause] = None
    invoice_immediately: bool = False
    disable_prorations: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON attributes, leaving out unset ids, anchor and pause."""
        result: Dict[str, Any] = {}
        if self.product_id:
            result["product_id"] = self.product_id
        if self.variant_id:
            result["variant_id"] = self.variant_id
        if self.billing_anchor:
            result["billing_anchor"] = self.billing_anchor
        result["cancelled"] = self.cancelled
        if self.pause is not None:
            result["pause"] = self.pause.to_dict()
        result["invoice_immediately"] = self.invoice_immediately
        result["disable_prorations"] = self.disable_prorations
        return result


@dataclass
class SubscriptionUpdateParams:
    """Parameters for updating a subscription."""

    id: str = ""
    attributes: SubscriptionUpdateAttributes = field(
        default_factory=SubscriptionUpdateAttributes
    )


@dataclass(frozen=True)
class SubscriptionRelationships:
    store: RelationshipLinks = field(default_factory=RelationshipLinks)
    customer: RelationshipLinks = field(default_factory=RelationshipLinks)
    order: RelationshipLinks = field(default_factory=RelationshipLinks)
    order_item: RelationshipLinks = field(default_factory=RelationshipLinks)
    product: RelationshipLinks = field(default_factory=RelationshipLinks)
    variant: RelationshipLinks = field(default_factory=RelationshipLinks)
    subscription_items: RelationshipLinks = field(default_factory=RelationshipLinks)
    subscription_invoices: RelationshipLinks = field(default_factory=RelationshipLinks)

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "SubscriptionRelationships":
        payload = payload or {}
        return cls(
            store=_rel(payload, "store"),
            customer=_rel(payload, "customer"),
            order=_rel(payload, "order"),
            order_item=_rel(payload, "order-item"),
            product=_rel(payload, "product"),
            variant=_rel(payload, "variant"),
            subscription_items=_rel(payload, "subscription-items"),
            subscription_invoices=_rel(payload, "subscription-invoices"),
        )


@dataclass
class WebhookCreateParams:
    """Parameters for creating a webhook."""

    url: str = ""
    events: List[str] = field(default_factory=list)
    secret: str = ""
    store_id: str = ""


@dataclass
class WebhookUpdateParams:
    """Parameters for updating a webhook."""

    id: str = ""
    secret: str = ""
    events: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class WebhookAttributes:
    """A registered webhook."""

    store_id: int = 0
    url: str = ""
    events: Tuple[str, ...] = ()
    last_sent_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    test_mode: bool = False

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "WebhookAttributes":
        payload = payload or {}
        return cls(
            store_id=payload.get("store_id", 0),
            url=payload.get("url", ""),
            events=tuple(payload.get("events") or ()),
            last_sent_at=parse_time(payload.get("last_sent_at")),
            created_at=parse_time(payload.get("created_at")),
            updated_at=parse_time(payload.get("updated_at")),
            test_mode=payload.get("test_mode", False),
        )


@dataclass(frozen=True)
class WebhookRelationships:
    store: RelationshipLinks = field(default_factory=RelationshipLinks)

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "WebhookRelationships":
        payload = payload or {}
        return cls(store=_rel(payload, "store"))


@dataclass(frozen=True)
class WebhookRequestMeta:
    """Meta data sent with a webhook event."""

    event_name: str = ""
    test_mode: bool = False
    custom_data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "WebhookRequestMeta":
        payload = payload or {}
        custom = payload.get("custom_data")
        return cls(
            event_name=payload.get("event_name", ""),
            test_mode=payload.get("test_mode", False),
            custom_data=None if custom is None else dict(custom),
        )


@dataclass(frozen=True)
class WebhookRequest(Generic[A, R]):
    """The body of a webhook event: meta data and the affected resource."""

    meta: WebhookRequestMeta
    data: ResourceData[A, R]

    @classmethod
    def from_dict(
        cls,
        payload: Optional[Mapping[str, Any]],
        attributes: Callable[[Mapping[str, Any]], A],
        relationships: Optional[Callable[[Mapping[str, Any]], R]] = None,
    ) -> "WebhookRequest[A, R]":
        payload = payload or {}
        return cls(
            meta=WebhookRequestMeta.from_dict(payload.get("meta")),
            data=ResourceData.from_dict(payload.get("data"), attributes, relationships),
        )


def _decode(payload: WebhookPayload) -> Mapping[str, Any]:
    if isinstance(payload, (bytes, bytearray, str)):
        decoded = json.loads(payload)
        if not isinstance(decoded, Mapping):
            raise TypeError("expected a JSON object for the webhook request")
        return decoded
    return payload


def parse_order_webhook(
    payload: WebhookPayload,
) -> WebhookRequest[OrderAttributes, OrderRelationships]:
    """Parse the body of an order event such as order_created."""
    return WebhookRequest.from_dict(
        _decode(payload), OrderAttributes.from_dict, OrderRelationships.from_dict
    )


def parse_subscription_webhook(
    payload: WebhookPayload,
) -> WebhookRequest[Subscription, SubscriptionRelationships]:
    """Parse the body of a subscription event such as subscription_updated."""
    return WebhookRequest.from_dict(
        _decode(payload), Subscription.from_dict, SubscriptionRelationships.from_dict
    )


def parse_subscription_invoice_webhook(
    payload: WebhookPayload,
) -> WebhookRequest[SubscriptionInvoiceAttributes, SubscriptionInvoiceRelationships]:
    """Parse the body of a subscription payment event."""
    return WebhookRequest.from_dict(
        _decode(payload),
        SubscriptionInvoiceAttributes.from_dict,
        SubscriptionInvoiceRelationships.from_dict,
    )