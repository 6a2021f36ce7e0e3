# tests/helpers.py


def register(client, username, password="pw1", email=None):
    return client.post("/api/auth/register", json={
        "username": username,
        "password": password,
        "email": email or f"{username}@x.com",
    })


def login(client, username, password="pw1"):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}
