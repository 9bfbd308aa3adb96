import uuid
from workout_manager.errors import StoreReadFailed

def uniq(): return f"u_{uuid.uuid4().hex[:10]}"
PWD = "StrongPassw0rd!"

def register(client, username, pwd=PWD):
    return client.post("/register", json={"username": username, "password": pwd})

def login(client, username, pwd=PWD):
    return client.post("/login", json={"username": username, "password": pwd})

def test_register_then_login_200(client):
    u = uniq()
    r = register(client, u)
    assert r.status_code == 201
    r = login(client, u)
    assert r.status_code == 200
    assert r.json()["username"] == u

def test_register_duplicate_409(client):
    u = uniq()
    assert register(client, u).status_code == 201
    r = register(client, u, "another-one")
    assert r.status_code == 409
    assert r.json()["detail"] == "user already exists"

def test_password_is_stored_hashed(client, db):
    u = uniq()
    register(client, u)
    stored = db["users"].find_one({"username": u})
    assert stored["password"] != PWD
    assert stored["password"].startswith("$2")

def test_unknown_user_and_wrong_password_look_identical(client):
    u = uniq()
    register(client, u)
    wrong = login(client, u, "WrongPass123!")
    unknown = login(client, uniq())
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"detail": "invalid credentials"}

def test_missing_fields_422(client):
    assert client.post("/register", json={"username": uniq()}).status_code == 422
    assert client.post("/login", json={"username": "", "password": PWD}).status_code == 422

def test_read_failure_500_without_driver_details(client, service, monkeypatch):
    def broken(username, password):
        raise StoreReadFailed("cursor id 42 not found on shard-07", op="users.authenticate")
    monkeypatch.setattr(service, "authenticate", broken)
    r = login(client, uniq())
    assert r.status_code == 500
    assert "shard" not in r.text

def test_username_is_trimmed_so_padding_is_a_duplicate(client):
    u = uniq()
    assert register(client, f"  {u}  ").status_code == 201
    assert register(client, u).status_code == 409
    r = login(client, f" {u}")
    assert r.status_code == 200
    assert r.json()["username"] == u
