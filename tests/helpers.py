"""
Request helpers shared by the API tests.
"""


def register(client, username, email, password="Pw123!", role=None):
    payload = {"username": username, "email": email, "password": password}
    if role is not None:
        payload["role"] = role
    return client.post("/api/auth/register", json=payload)


def login(client, username, password="Pw123!"):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def create_patient(client, **fields):
    payload = {"firstName": "Ada", "lastName": "Lovelace"}
    payload.update(fields)
    return client.post("/api/patients", json=payload)
