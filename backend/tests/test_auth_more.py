from fastapi.testclient import TestClient
from jose import jwt
from gymapp.main import app
from gymapp.settings import get_settings
import uuid

client = TestClient(app)
def uniq_email(): return f"{uuid.uuid4().hex[:10]}@ex.com"
PWD = "StrongPassw0rd!"

def register(email, pwd=PWD, username="bencher"):
    return client.post("/auth/register", json={"email": email, "username": username, "password": pwd})

def login(email, pwd=PWD):
    return client.post("/auth/login", json={"email": email, "password": pwd})

def test_register_duplicate_email_400():
    e = uniq_email()
    assert register(e).status_code == 201
    r = register(e.upper())
    assert r.status_code == 400
    assert r.json()["detail"] == "email already registered"

def test_register_blank_username_422():
    assert register(uniq_email(), username="   ").status_code == 422

def test_login_unknown_email_401():
    assert login(uniq_email()).status_code == 401

def test_login_wrong_password_401():
    e = uniq_email()
    register(e)
    r = login(e, "WrongPass123!")
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid credentials"

def test_login_is_case_insensitive_on_email():
    e = uniq_email()
    register(e)
    assert login(e.upper()).status_code == 200

def test_token_shape():
    e = uniq_email()
    register(e, username="deadlifter")
    body = login(e).json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == get_settings().ACCESS_TOKEN_EXPIRE_MINUTES * 60
    claims = jwt.get_unverified_claims(body["access_token"])
    assert claims["username"] == "deadlifter"
    assert claims["exp"] > claims["iat"]

def test_me_roundtrip_200():
    e = uniq_email()
    register(e)
    tok = login(e).json()["access_token"]
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {tok}"})
    assert me.status_code == 200
    assert me.json()["email"].lower() == e.lower()
    assert me.json()["username"] == "bencher"
