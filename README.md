# lemonsqueezy

A Python client for the Lemon Squeezy JSON:API. It reads stores, products,
variants, orders, order items and the authenticated user. It also turns API
documents and webhook request bodies into typed, frozen dataclasses.

## Installation

```
pip install lemonsqueezy
```

## Modules

- `lemonsqueezy.transport`: `Transport` sends authenticated requests. It uses
  an `httpx.Client`, which you may pass in yourself. If you do not, the
  transport creates its own client and closes it in `close()` or when the
  `with` block ends.
- `lemonsqueezy.response`: `Response` is a raw reply with `status_code`,
  `body` and `headers`. `ApiError` is the error for a failed call. The
  envelope types are `Document`, `DocumentList`, `ResourceData`, `JsonApi`,
  `Link`, `SelfLink` and `RelationshipLinks`. `parse_time` reads RFC 3339
  timestamps.
- `lemonsqueezy.commerce`: attributes and relationships for orders, order
  items, products, stores, users and variants.
- `lemonsqueezy.billing`: attributes and relationships for subscriptions,
  subscription items, subscription invoices and webhooks. It also has the
  parameter classes for updates and the webhook payload parsers.
- `lemonsqueezy.catalog_services`: `OrdersService`, `OrderItemsService`,
  `ProductsService`, `StoresService`, `VariantsService` and `UsersService`.

## Usage

`Transport` needs the API's base URL. Paths such as `/v1/orders` are
appended to it.

```python
from lemonsqueezy.transport import Transport
from lemonsqueezy.catalog_services import OrdersService, StoresService, UsersService

with Transport(BASE_URL, api_key="placeholder") as transport:
    user = UsersService(transport).me()
    print(user.data.attributes.email)

    stores = StoresService(transport).list()
    for store in stores.data:
        print(store.id, store.attributes.name)

    order = OrdersService(transport).get("1")
    print(order.data.attributes.total_formatted)
```

Each `get` returns a `Document`, and `data` holds one `ResourceData`. Each
`list` returns a `DocumentList`, and `data` holds a list of `ResourceData`
plus the page's `links` and `meta`. Timestamps are parsed into timezone-aware
`datetime` objects.

## Errors

A reply with a status other than 200, 201, 202, 204 or 205 raises
`ApiError`. Its message has the form `"<code>: <reason phrase>, Body: <body>"`.
The raw reply is kept in `error.response`, and the status code in
`error.status_code`.

A body that is not valid JSON raises `json.JSONDecodeError`.

## Webhook payloads

`parse_order_webhook`, `parse_subscription_webhook` and
`parse_subscription_invoice_webhook` each accept a raw body (`bytes` or
`str`) or an already decoded mapping. Each returns a `WebhookRequest` with
`meta` and `data`:

```python
from lemonsqueezy.billing import parse_order_webhook

event = parse_order_webhook(body)
print(event.meta.event_name, event.meta.custom_data)
print(event.data.attributes.identifier)
```

## What the package does not do

The package has no service classes for these endpoints:

- subscriptions
- subscription items
- subscription invoices
- webhooks

It does not check webhook signatures either.

The data classes for these resources are in `lemonsqueezy.billing`. You can
call the endpoints yourself with `Transport.request`:

```python
import json

from lemonsqueezy.billing import (
    Subscription,
    SubscriptionRelationships,
    SubscriptionUpdateAttributes,
)
from lemonsqueezy.response import Document

attributes = SubscriptionUpdateAttributes(variant_id=11)
payload = {"data": {"type": "subscriptions", "id": "1", "attributes": attributes.to_dict()}}
reply = transport.request("PATCH", "/v1/subscriptions/1", payload)
subscription = Document.from_dict(
    json.loads(reply.body), Subscription.from_dict, SubscriptionRelationships.from_dict
)
```

`SubscriptionItemListParams(subscription_id="1").to_query()` returns the
`filter[...]` query parameters for listing subscription items.

## Running the tests

```
pip install -e ".[test]"
pytest
```