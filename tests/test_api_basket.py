import json

import pytest
from starlette.requests import Request

from restaurant_orders.api.deps import BasketSession, get_session
from restaurant_orders.errors import SessionTypeMismatch, SessionUnavailable


BURGER_FORM = {"item_name": "Burger", "item_price": "5.00", "item_link": "burger"}
FRIES_FORM = {"item_name": "Fries", "item_price": "2.50", "item_link": "fries"}


def add(client, form, rest_link="joes-diner"):
    return client.post("/basket/add", data={**form, "rest_link": rest_link})


def test_add_requires_login(client):
    response = add(client, BURGER_FORM)

    assert response.status_code == 302
    assert response.headers["location"] == "/login"
    assert client.get("/basket").json()["lines"] == []


def test_add_redirects_to_order_view(client, login_as):
    login_as("alice")

    response = add(client, BURGER_FORM)

    assert response.status_code == 302
    assert response.headers["location"] == "/order/joes-diner"

    basket = client.get("/basket").json()
    assert basket["restaurant_link"] == "joes-diner"
    assert basket["user_name"] == "alice"
    assert basket["total_amount"] == "5.00"
    assert basket["lines"] == [{"name": "Burger", "price": "5.00", "link": "burger", "quantity": 1}]


def test_switching_restaurant_clears_basket(client, login_as):
    login_as("alice")
    add(client, BURGER_FORM)
    add(client, FRIES_FORM)

    response = add(client, {"item_name": "Maki", "item_price": "7.25", "item_link": "maki"}, rest_link="sushi-bar")

    assert response.headers["location"] == "/order/sushi-bar"
    basket = client.get("/basket").json()
    assert basket["restaurant_link"] == "sushi-bar"
    assert [line["name"] for line in basket["lines"]] == ["Maki"]
    assert basket["total_amount"] == "7.25"


def test_remove_and_empty(client, login_as):
    login_as("alice")
    add(client, BURGER_FORM)
    add(client, BURGER_FORM)
    add(client, FRIES_FORM)

    response = client.post("/basket/remove", data=BURGER_FORM)
    assert response.status_code == 302
    assert response.headers["location"] == "/order/joes-diner"
    assert client.get("/basket").json()["total_amount"] == "7.50"

    client.post("/basket/remove", data=FRIES_FORM)
    assert client.get("/basket").json()["lines"] == [
        {"name": "Burger", "price": "5.00", "link": "burger", "quantity": 1}
    ]

    response = client.post("/basket/empty")
    assert response.headers["location"] == "/order/joes-diner"
    basket = client.get("/basket").json()
    assert basket["lines"] == []
    assert basket["total_amount"] == "0.00"
    assert basket["restaurant_link"] == "joes-diner"


def test_submit_order(client, login_as, store):
    login_as("alice")
    add(client, BURGER_FORM)
    add(client, BURGER_FORM)
    add(client, FRIES_FORM)

    response = client.post("/basket/submit")

    assert response.status_code == 302
    assert response.headers["location"] == "/order/joes-diner"
    saved = json.loads((store.directory / "joes-diner.json").read_text())
    assert saved == [
        {"completed": False, "itemsInfo": {"Burger": 2, "Fries": 1}, "buyer": "alice", "totalAmount": "12.50"}
    ]
    basket = client.get("/basket").json()
    assert basket["lines"] == []
    assert basket["total_amount"] == "0.00"


def test_operations_without_basket(client):
    assert client.post("/basket/remove", data=BURGER_FORM).status_code == 404
    assert client.post("/basket/empty").status_code == 404
    assert client.post("/basket/submit").status_code == 404


def test_malformed_form_is_internal_error(client, login_as):
    login_as("alice")

    response = client.post("/basket/add", data={"item_name": "Burger"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Could not decode submitted form"


def test_invalid_restaurant_link(client, login_as):
    login_as("alice")

    response = add(client, BURGER_FORM, rest_link="..")

    assert response.status_code == 400


def test_order_page_shows_basket_of_that_restaurant(client, login_as):
    login_as("alice")
    add(client, BURGER_FORM)

    own = client.get("/order/joes-diner").json()
    other = client.get("/order/sushi-bar").json()

    assert own["basket"]["total_amount"] == "5.00"
    assert other == {"restaurant_link": "sushi-bar", "basket": None}


def test_basket_slot_with_wrong_type():
    with pytest.raises(SessionTypeMismatch):
        BasketSession({"basket": "not a basket"}).load()

    with pytest.raises(SessionTypeMismatch):
        BasketSession({"basket": {"lines": [{"name": "Burger", "quantity": 0}]}}).load()


def test_empty_basket_slot():
    assert BasketSession({}).load() is None


def test_add_large_price(client, login_as):
    login_as("alice")

    response = add(client, {"item_name": "Island", "item_price": "1" + "0" * 28, "item_link": "island"})

    assert response.status_code == 302
    assert client.get("/basket").json()["total_amount"] == "1" + "0" * 28 + ".00"


def test_logged_out_malformed_form_redirects_to_login(client):
    response = client.post("/basket/add", data={"item_name": "Burger"})

    assert response.status_code == 302
    assert response.headers["location"] == "/login"


def test_failed_submit_keeps_basket(client, login_as, store):
    login_as("alice")
    add(client, BURGER_FORM)
    add(client, FRIES_FORM)
    # каталог заказов занят обычным файлом, запись упадёт
    store.directory.write_text("")

    response = client.post("/basket/submit")

    assert response.status_code == 500
    assert response.json()["detail"] == "Could not write joes-diner.json"
    basket = client.get("/basket").json()
    assert [line["name"] for line in basket["lines"]] == ["Burger", "Fries"]
    assert basket["total_amount"] == "7.50"


def test_request_without_session_middleware():
    request = Request({"type": "http", "method": "POST", "path": "/basket/add", "headers": []})

    with pytest.raises(SessionUnavailable):
        get_session(request)
