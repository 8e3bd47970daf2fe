import pytest


pytestmark = pytest.mark.asyncio


async def signup(client, username: str, email: str, password: str, security_pass: str = "SEC123"):
    return await client.post(
        "/signup",
        json={"username": username, "email": email, "password": password, "securityPass": security_pass},
    )


async def login(client, email: str, password: str):
    return await client.post("/login", json={"email": email, "password": password})


async def test_signup_and_login_flow(client):
    email = "alice@college.example.org"

    before = await client.post("/check-email", json={"email": email})
    assert before.status_code == 200
    assert before.json() == {"exists": False}

    resp = await signup(client, "alice", email, "Pw1!aaaa")
    body = resp.json()
    assert resp.status_code == 200
    assert body["user"]["username"] == "alice"
    assert body["user"]["email"] == email
    assert "password" not in body["user"]
    assert "securityPass" not in body["user"]

    after = await client.post("/check-email", json={"email": email})
    assert after.json() == {"exists": True}

    # Duplicate email should fail
    dup = await signup(client, "alice2", email, "Other!123")
    assert dup.status_code == 400
    assert dup.json()["code"] == "EMAIL_EXISTS"

    login_resp = await login(client, email, "Pw1!aaaa")
    assert login_resp.status_code == 200
    user = login_resp.json()["user"]
    assert user["credits"] == 0
    assert user["uploadCount"] == 0
    assert user["id"] == body["user"]["id"]
    assert "password" not in user


async def test_login_failures(client):
    await signup(client, "bob", "bob@college.example.org", "Secret#1")

    missing = await login(client, "nobody@college.example.org", "Secret#1")
    assert missing.status_code == 404
    assert missing.json()["code"] == "USER_NOT_FOUND"

    wrong = await login(client, "bob@college.example.org", "secret#1")  # Case-sensitive
    assert wrong.status_code == 401
    assert wrong.json()["code"] == "AUTH_INVALID_CREDENTIALS"


async def test_signup_requires_all_fields(client):
    resp = await signup(client, "carol", "carol@college.example.org", "")
    assert resp.status_code == 400
    assert resp.json()["code"] == "BAD_REQUEST"
    exists = await client.post("/check-email", json={"email": "carol@college.example.org"})
    assert exists.json()["exists"] is False


async def test_user_profile(client):
    await signup(client, "dave", "dave@college.example.org", "Dave#123")

    resp = await client.get("/user/dave@college.example.org")
    assert resp.status_code == 200
    assert resp.json() == {
        "username": "dave",
        "email": "dave@college.example.org",
        "credits": 0,
        "uploadCount": 0,
    }

    missing = await client.get("/user/ghost@college.example.org")
    assert missing.status_code == 404


async def test_password_reset_flow(client):
    email = "erin@college.example.org"
    await signup(client, "erin", email, "ResetMe#12", security_pass="Blue-Owl-7")

    unknown = await client.post("/verify-security-pass", json={"email": "x@college.example.org", "securityPass": "a"})
    assert unknown.status_code == 404

    mismatch = await client.post("/verify-security-pass", json={"email": email, "securityPass": "blue-owl-7"})
    assert mismatch.status_code == 400
    assert mismatch.json()["code"] == "INVALID_SECURITY_PASS"

    verified = await client.post("/verify-security-pass", json={"email": email, "securityPass": "Blue-Owl-7"})
    assert verified.status_code == 200
    assert verified.json()["message"] == "Security password verified successfully"

    update = await client.post("/update-password", json={"email": email, "newPassword": "ResetDone#34"})
    assert update.status_code == 200

    # Old password should fail, new password succeeds
    assert (await login(client, email, "ResetMe#12")).status_code == 401
    assert (await login(client, email, "ResetDone#34")).status_code == 200


async def test_update_password_unknown_user(client):
    resp = await client.post("/update-password", json={"email": "ghost@college.example.org", "newPassword": "x"})
    assert resp.status_code == 404
    assert resp.json()["message"] == "User not found"


async def test_missing_body_field_is_validation_error(client):
    resp = await client.post("/login", json={"email": "a@college.example.org"})
    assert resp.status_code == 422
