import json
from datetime import datetime, timezone

import httpx
import pytest

from lemonsqueezy.catalog_services import (
    OrderItemsService,
    OrdersService,
    ProductsService,
    StoresService,
    UsersService,
    VariantsService,
)
from lemonsqueezy.response import ApiError
from lemonsqueezy.transport import Transport

BASE_URL = "https://api.example.com"


def make_transport(status, body):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(status, content=body)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    return Transport(BASE_URL, "placeholder", client), seen


def resource(kind, ident, attributes):
    return {
        "type": kind,
        "id": ident,
        "attributes": attributes,
        "relationships": {
            "store": {
                "links": {
                    "related": f"{BASE_URL}/v1/{kind}/{ident}/store",
                    "self": f"{BASE_URL}/v1/{kind}/{ident}/relationships/store",
                }
            }
        },
        "links": {"self": f"{BASE_URL}/v1/{kind}/{ident}"},
    }


def single(kind, ident, attributes):
    return json.dumps(
        {
            "jsonapi": {"version": "1.0"},
            "links": {"self": f"{BASE_URL}/v1/{kind}/{ident}"},
            "data": resource(kind, ident, attributes),
        }
    ).encode()


def many(kind, attribute_list):
    return json.dumps(
        {
            "meta": {"page": {"currentPage": 1, "total": len(attribute_list)}},
            "jsonapi": {"version": "1.0"},
            "links": {"first": f"{BASE_URL}/v1/{kind}?page[number]=1"},
            "data": [
                resource(kind, str(index), attrs)
                for index, attrs in enumerate(attribute_list, start=1)
            ],
        }
    ).encode()


ORDER = {
    "store_id": 1,
    "identifier": "89b36d62-4f5c-4353-853f-0c769d0535c8",
    "order_number": 1,
    "user_email": "customer@example.com",
    "total": 999,
    "refunded_at": None,
    "created_at": "2021-08-17T09:45:53.000000Z",
    "updated_at": "2021-08-17T09:45:53.000000Z",
}
ORDER_ITEM = {"order_id": 1, "product_id": 1, "variant_id": 1, "price": 1199}
PRODUCT = {"store_id": 1, "name": "Lemonade", "price": 1199, "from_price": None}
STORE = {"name": "My Store", "slug": "my-store", "country_nicename": "United States"}
VARIANT = {"product_id": 1, "name": "Default", "interval": "month", "interval_count": 1}
USER = {
    "name": "Darlene Daugherty",
    "email": "darlene@example.com",
    "createdAt": "2021-05-24T14:08:31.000000Z",
}


def test_orders_get():
    transport, seen = make_transport(200, single("orders", "1", ORDER))
    order = OrdersService(transport).get("1")
    assert order.data.id == "1"
    assert order.data.attributes.identifier == ORDER["identifier"]
    assert order.data.attributes.created_at == datetime(
        2021, 8, 17, 9, 45, 53, tzinfo=timezone.utc
    )
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/v1/orders/1"


def test_orders_list():
    transport, seen = make_transport(200, many("orders", [ORDER]))
    orders = OrdersService(transport).list()
    assert len(orders.data) == 1
    assert seen[0].url.path == "/v1/orders"


def test_order_items_get():
    transport, seen = make_transport(200, single("order-items", "1", ORDER_ITEM))
    item = OrderItemsService(transport).get("1")
    assert item.data.id == "1"
    assert item.data.attributes.price == 1199
    assert seen[0].url.path == "/v1/order-items/1"


def test_order_items_list():
    transport, seen = make_transport(200, many("order-items", [ORDER_ITEM]))
    items = OrderItemsService(transport).list()
    assert len(items.data) == 1
    assert seen[0].url.path == "/v1/order-items"


def test_products_get():
    transport, seen = make_transport(200, single("products", "1", PRODUCT))
    product = ProductsService(transport).get("1")
    assert product.data.id == "1"
    assert product.data.attributes.name == "Lemonade"
    assert product.data.attributes.from_price is None
    assert seen[0].url.path == "/v1/products/1"


def test_products_list():
    transport, seen = make_transport(200, many("products", [PRODUCT, PRODUCT]))
    products = ProductsService(transport).list()
    assert len(products.data) == 2
    assert [p.id for p in products.data] == ["1", "2"]
    assert seen[0].url.path == "/v1/products"


def test_stores_get():
    transport, seen = make_transport(200, single("stores", "1", STORE))
    store = StoresService(transport).get("1")
    assert store.data.id == "1"
    assert store.data.attributes.country_nice_name == "United States"
    assert seen[0].url.path == "/v1/stores/1"


def test_stores_list():
    transport, seen = make_transport(200, many("stores", [STORE, STORE]))
    stores = StoresService(transport).list()
    assert len(stores.data) == 2
    assert seen[0].url.path == "/v1/stores/"


def test_variants_get():
    transport, seen = make_transport(200, single("variants", "1", VARIANT))
    variant = VariantsService(transport).get("1")
    assert variant.data.id == "1"
    assert variant.data.attributes.interval == "month"
    assert seen[0].url.path == "/v1/variants/1"


def test_variants_list():
    transport, seen = make_transport(200, many("variants", [VARIANT, VARIANT]))
    variants = VariantsService(transport).list()
    assert len(variants.data) == 2
    assert seen[0].url.path == "/v1/variants"


def test_users_me():
    transport, seen = make_transport(200, single("users", "1", USER))
    user = UsersService(transport).me()
    assert user.data.attributes.email == "darlene@example.com"
    assert user.data.relationships is None
    assert user.jsonapi.version == "1.0"
    assert seen[0].url.path == "/v1/users/me"
    assert seen[0].headers["Authorization"] == "Bearer placeholder"


@pytest.mark.parametrize(
    "call",
    [
        lambda t: OrdersService(t).get("1"),
        lambda t: OrdersService(t).list(),
        lambda t: OrderItemsService(t).get("1"),
        lambda t: OrderItemsService(t).list(),
        lambda t: ProductsService(t).get("1"),
        lambda t: ProductsService(t).list(),
        lambda t: StoresService(t).get("1"),
        lambda t: StoresService(t).list(),
        lambda t: VariantsService(t).get("1"),
        lambda t: VariantsService(t).list(),
        lambda t: UsersService(t).me(),
    ],
)
def test_server_error_raises_api_error(call):
    transport, _ = make_transport(500, b"")
    with pytest.raises(ApiError) as info:
        call(transport)
    assert info.value.status_code == 500
    assert info.value.response.status_code == 500
    assert str(info.value).startswith("500: Internal Server Error")


def test_users_me_with_invalid_json_response():
    transport, _ = make_transport(200, b"invalid JSON response")
    with pytest.raises(json.JSONDecodeError):
        UsersService(transport).me()