def register(client, username, password="secret", restaurant_link=None):
    data = {"username": username, "password": password}
    if restaurant_link:
        data["restaurant_link"] = restaurant_link
    return client.post("/register", data=data)


def test_register_and_login(db_client):
    response = register(db_client, "alice")
    assert response.status_code == 201
    assert response.json()["role"] == "customer"

    response = db_client.post("/login", data={"username": "alice", "password": "secret"})
    assert response.status_code == 200
    assert db_client.get("/users/me").json() == {
        "username": "alice",
        "role": "customer",
        "restaurant_link": None,
    }


def test_duplicate_username(db_client):
    register(db_client, "alice")

    assert register(db_client, "alice").status_code == 400


def test_bad_password(db_client):
    register(db_client, "alice")

    response = db_client.post("/login", data={"username": "alice", "password": "wrong"})

    assert response.status_code == 401
    assert db_client.get("/users/me").json() is None


def test_logged_in_user_fills_basket(db_client):
    register(db_client, "alice")
    db_client.post("/login", data={"username": "alice", "password": "secret"})

    response = db_client.post(
        "/basket/add",
        data={"item_name": "Burger", "item_price": "5.00", "item_link": "burger", "rest_link": "joes-diner"},
    )

    assert response.headers["location"] == "/order/joes-diner"
    assert db_client.get("/basket").json()["user_name"] == "alice"


def test_staff_completes_order(db_client, store):
    register(db_client, "alice")
    register(db_client, "joe", restaurant_link="joes-diner")

    db_client.post("/login", data={"username": "alice", "password": "secret"})
    db_client.post(
        "/basket/add",
        data={"item_name": "Burger", "item_price": "5.00", "item_link": "burger", "rest_link": "joes-diner"},
    )
    db_client.post("/basket/submit")
    db_client.post("/logout")

    db_client.post("/login", data={"username": "joe", "password": "secret"})
    response = db_client.post("/orders/complete", data={"index": "0"})

    assert response.status_code == 302
    assert store.load_pending("joes-diner") == []
    assert store.load_completed("joes-diner")[0].buyer == "alice"
