from app.services import products as product_service
from conftest import PASSWORD, auth_headers, product_payload


def test_create_product_binds_owner(client, producer, category):
    payload = product_payload(category["id"], producerId=999)
    response = client.post("/products", json=payload, headers=auth_headers(producer["token"]))
    assert response.status_code == 201
    body = response.json()
    assert body["producerId"] == producer["id"]
    assert body["categoryId"] == category["id"]


def test_create_product_requires_authentication(client, category):
    response = client.post("/products", json=product_payload(category["id"]))
    assert response.status_code == 401


def test_create_product_requires_fields(client, producer, category):
    payload = product_payload(category["id"])
    del payload["image_url"]
    response = client.post("/products", json=payload, headers=auth_headers(producer["token"]))
    assert response.status_code == 400
    assert response.json() == {"error": "All required fields must be filled in."}


def test_create_product_with_unknown_category(client, producer):
    response = client.post("/products", json=product_payload(999), headers=auth_headers(producer["token"]))
    assert response.status_code == 400
    assert response.json() == {"error": "Category not found."}


def test_create_product_rejects_non_positive_price(client, producer, category):
    response = client.post(
        "/products", json=product_payload(category["id"], price=0), headers=auth_headers(producer["token"])
    )
    assert response.status_code == 400


def test_product_round_trip(client, producer, category, product):
    response = client.get(f"/products/{product['id']}")
    assert response.status_code == 200
    body = response.json()

    sent = product_payload(category["id"])
    for field, value in sent.items():
        assert body[field] == value, field

    assert body["category"] == {"id": category["id"], "name": "Frutas"}
    assert body["producer"]["id"] == producer["id"]
    assert body["producer"]["name"] == "Ana"
    assert "password" not in body["producer"]
    assert "cpf" not in body["producer"]


def test_get_missing_product(client):
    response = client.get("/products/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found."}


def test_list_products_from_every_producer(client, producer, other_producer, category, product):
    client.post(
        "/products",
        json=product_payload(category["id"], name="Laranja"),
        headers=auth_headers(other_producer["token"]),
    )
    response = client.get("/products")
    assert response.status_code == 200
    products = response.json()
    assert {p["name"] for p in products} == {"Banana Prata", "Laranja"}
    assert {p["producerId"] for p in products} == {producer["id"], other_producer["id"]}
    assert all(p["category"]["name"] == "Frutas" for p in products)


def test_owner_updates_product_partially(client, producer, product):
    response = client.put(
        f"/products/{product['id']}",
        json={"price": 15, "stock_quantity": 12.5},
        headers=auth_headers(producer["token"]),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["price"] == 15
    assert body["stock_quantity"] == 12.5
    assert body["name"] == product["name"]
    assert body["category"]["id"] == product["categoryId"]


def test_update_moves_product_to_other_category(client, producer, product):
    headers = auth_headers(producer["token"])
    legumes = client.post("/categories", json={"name": "Legumes"}, headers=headers).json()
    response = client.put(f"/products/{product['id']}", json={"categoryId": legumes["id"]}, headers=headers)
    assert response.status_code == 200
    assert response.json()["category"] == legumes

    response = client.put(f"/products/{product['id']}", json={"categoryId": 999}, headers=headers)
    assert response.status_code == 400


def test_update_cannot_clear_required_field(client, producer, product):
    response = client.put(
        f"/products/{product['id']}", json={"name": None}, headers=auth_headers(producer["token"])
    )
    assert response.status_code == 400


def test_non_owner_cannot_update(client, other_producer, product):
    response = client.put(
        f"/products/{product['id']}", json={"price": 1}, headers=auth_headers(other_producer["token"])
    )
    assert response.status_code == 403
    assert client.get(f"/products/{product['id']}").json()["price"] == product["price"]


def test_update_missing_product(client, producer):
    response = client.put("/products/999", json={"price": 1}, headers=auth_headers(producer["token"]))
    assert response.status_code == 404


def test_non_owner_cannot_delete(client, other_producer, product):
    response = client.delete(f"/products/{product['id']}", headers=auth_headers(other_producer["token"]))
    assert response.status_code == 403
    assert client.get(f"/products/{product['id']}").status_code == 200


def test_owner_deletes_product(client, producer, product):
    headers = auth_headers(producer["token"])
    assert client.delete(f"/products/{product['id']}", headers=headers).status_code == 204
    assert client.get(f"/products/{product['id']}").status_code == 404
    assert client.delete(f"/products/{product['id']}", headers=headers).status_code == 404


def test_price_with_more_than_two_decimals_is_rejected(client, producer, category):
    response = client.post(
        "/products", json=product_payload(category["id"], price=12.345), headers=auth_headers(producer["token"])
    )
    assert response.status_code == 400
    assert "price" in response.json()["error"]
    assert client.get("/products").json() == []


def test_update_stock_with_more_than_two_decimals_is_rejected(client, producer, product):
    response = client.put(
        f"/products/{product['id']}", json={"stock_quantity": 1.005}, headers=auth_headers(producer["token"])
    )
    assert response.status_code == 400
    assert client.get(f"/products/{product['id']}").json()["stock_quantity"] == product["stock_quantity"]


def test_two_decimal_price_is_kept_exactly(client, producer, category):
    response = client.post(
        "/products", json=product_payload(category["id"], price=12.34), headers=auth_headers(producer["token"])
    )
    assert response.status_code == 201
    assert client.get(f"/products/{response.json()['id']}").json()["price"] == 12.34


def test_deleted_producer_token_cannot_create_products(client, producer, category):
    headers = auth_headers(producer["token"])
    response = client.request(
        "DELETE", f"/producers/{producer['id']}", json={"currentPassword": PASSWORD}, headers=headers
    )
    assert response.status_code == 204

    response = client.post("/products", json=product_payload(category["id"]), headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": product_service.STALE_REFERENCE_MESSAGE}


def test_update_to_vanished_category_is_rejected(client, producer, product, monkeypatch):
    # category disappears between the existence check and the write
    monkeypatch.setattr(product_service, "_ensure_category_exists", lambda db, category_id: None)
    response = client.put(
        f"/products/{product['id']}", json={"categoryId": 999}, headers=auth_headers(producer["token"])
    )
    assert response.status_code == 400
    assert response.json() == {"error": product_service.STALE_REFERENCE_MESSAGE}
    assert client.get(f"/products/{product['id']}").json()["categoryId"] == product["categoryId"]
