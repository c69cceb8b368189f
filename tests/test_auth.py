from datetime import timedelta

from bson import ObjectId

from jodi.utils.jwt_utils import create_access_token


def register(client, email="priya@example.com", password="secret123", name="Priya"):
    return client.post("/api/auth/register", json={"name": name, "email": email, "password": password})


def test_register_user(client, users_collection):
    """Test user registration"""
    response = register(client)

    assert response.status_code == 201
    stored = users_collection.find_one({"email": "priya@example.com"})
    assert stored["isAdmin"] is False
    assert stored["password"] != "secret123"


def test_register_duplicate_email(client):
    register(client)
    response = register(client)

    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_register_admin_email_grants_admin(client, users_collection):
    response = register(client, email="Admin@Example.com")

    assert response.status_code == 201
    assert users_collection.find_one({"email": "admin@example.com"})["isAdmin"] is True


def test_login_success(client):
    register(client)
    response = client.post("/api/auth/login", json={"email": "priya@example.com", "password": "secret123"})

    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["isAdmin"] is False
    assert data["user"]["email"] == "priya@example.com"
    assert "access_token" in response.cookies


def test_login_invalid_credentials(client):
    register(client)
    response = client.post("/api/auth/login", json={"email": "priya@example.com", "password": "wrong-password"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid credentials"


def test_token_endpoint_and_me(client):
    register(client)
    response = client.post("/api/auth/token", data={"username": "priya@example.com", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Priya"
    assert "password" not in me.json()


def test_me_requires_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401


def test_expired_token_rejected(client):
    token = create_access_token(str(ObjectId()), "old@example.com", expires_delta=timedelta(minutes=-5))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


def test_garbage_token_rejected(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


# --- Admin user management ---
def test_list_users_admin_only(client, admin_headers, user_headers):
    assert client.get("/api/users/", headers=user_headers).status_code == 403

    response = client.get("/api/users/", headers=admin_headers)
    assert response.status_code == 200
    emails = {user["email"] for user in response.json()}
    assert emails == {"admin@example.com", "viewer@example.com"}
    assert all("password" not in user for user in response.json())


def test_admin_updates_user_password(client, admin_headers, users_collection):
    register(client)
    user_id = str(users_collection.find_one({"email": "priya@example.com"})["_id"])

    response = client.put(f"/api/users/{user_id}", json={"password": "newsecret"}, headers=admin_headers)
    assert response.status_code == 200

    login = client.post("/api/auth/login", json={"email": "priya@example.com", "password": "newsecret"})
    assert login.status_code == 200


def test_admin_update_requires_fields(client, admin_headers):
    response = client.put(f"/api/users/{ObjectId()}", json={}, headers=admin_headers)
    assert response.status_code == 400


def test_admin_deletes_user(client, admin_headers, users_collection):
    register(client)
    user_id = str(users_collection.find_one({"email": "priya@example.com"})["_id"])

    assert client.delete(f"/api/users/{user_id}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/users/{user_id}", headers=admin_headers).status_code == 404
    assert client.delete("/api/users/not-an-id", headers=admin_headers).status_code == 400
