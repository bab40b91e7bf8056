"""
Tests for the /api/auth endpoints.
"""

from fakes import TEST_PASSWORD, auth_headers, create_test_token


def _login(client, email="jane@example.com", password=TEST_PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


class TestRegistration:

    def test_register(self, client, mail):
        """Registration returns the new, unverified user in the envelope."""
        response = client.post(
            "/api/auth/register",
            json={
                "email": "Jane@Example.com",
                "password": TEST_PASSWORD,
                "firstName": "Jane",
                "lastName": "Doe",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"].startswith("User registered successfully")
        user = body["data"]["user"]
        assert user["email"] == "jane@example.com"
        assert user["isEmailVerified"] is False
        assert user["role"] == "user"
        assert user["fullName"] == "Jane Doe"
        assert "loginAttempts" not in user
        assert "lockUntil" not in user
        assert len(mail.sent) == 1

    def test_duplicate_email(self, client, signup):
        signup()

        response = client.post(
            "/api/auth/register",
            json={
                "email": "jane@example.com",
                "password": TEST_PASSWORD,
                "firstName": "Jane",
                "lastName": "Doe",
            },
        )

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "message": "User with this email already exists",
            "code": "EMAIL_ALREADY_REGISTERED",
        }

    def test_invalid_body(self, client):
        """Missing and malformed fields are listed by name."""
        response = client.post(
            "/api/auth/register",
            json={"email": "not-an-email", "password": TEST_PASSWORD},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert body["code"] == "VALIDATION_ERROR"
        fields = {error["field"] for error in body["errors"]}
        assert {"email", "firstName", "lastName"} <= fields

    def test_weak_password(self, client):
        response = client.post(
            "/api/auth/register",
            json={
                "email": "jane@example.com",
                "password": "short",
                "firstName": "Jane",
                "lastName": "Doe",
            },
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "password", "message": "Password must be at least 8 characters long"}
        ]


class TestEmailVerification:

    def test_verify_and_reuse(self, client, mail, signup):
        signup(verified=False)
        token = mail.last_token()

        first = client.post("/api/auth/verify-email", json={"token": token})
        second = client.post("/api/auth/verify-email", json={"token": token})

        assert first.status_code == 200
        assert first.json()["data"]["user"]["isEmailVerified"] is True
        assert second.status_code == 400
        assert second.json()["code"] == "INVALID_OR_EXPIRED_TOKEN"

    def test_expired_token(self, client, mail, clock, signup):
        signup(verified=False)
        clock.advance(hours=24)

        response = client.post("/api/auth/verify-email", json={"token": mail.last_token()})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid or expired verification token"

    def test_resend(self, client, mail, signup):
        signup(verified=False)

        response = client.post(
            "/api/auth/resend-verification", json={"email": "jane@example.com"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Verification email sent successfully"
        assert len(mail.sent) == 2

    def test_resend_already_verified(self, client, signup):
        signup()

        response = client.post(
            "/api/auth/resend-verification", json={"email": "jane@example.com"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "ALREADY_VERIFIED"

    def test_resend_unknown(self, client):
        response = client.post(
            "/api/auth/resend-verification", json={"email": "nobody@example.com"}
        )

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestLogin:

    def test_login(self, client, signup):
        user = signup()

        response = _login(client)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == user["id"]
        assert data["user"]["lastLogin"] is not None
        assert data["accessToken"]
        assert data["refreshToken"]
        assert data["tokenType"] == "bearer"

    def test_unverified_user_can_log_in(self, client, signup):
        signup(verified=False)

        assert _login(client).status_code == 200

    def test_wrong_password(self, client, signup):
        signup()

        response = _login(client, password="wrong-password")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["message"] == "Invalid email or password"

    def test_unknown_email_looks_like_wrong_password(self, client):
        response = _login(client, email="nobody@example.com")

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_rate_limited_on_sixth_attempt(self, client, signup):
        signup()

        statuses = [_login(client, password="wrong-password").status_code for _ in range(6)]

        assert statuses == [401] * 5 + [429]

    def test_locked_after_five_failures(self, client, monotonic, signup):
        """Once the rate window passes, the account lock still holds."""
        signup()
        for _ in range(5):
            _login(client, password="wrong-password")

        monotonic.advance(15 * 60)
        response = _login(client)

        assert response.status_code == 423
        assert response.json()["code"] == "ACCOUNT_LOCKED"


class TestPasswordReset:

    def test_forgot_password_same_response(self, client, signup):
        signup()

        known = client.post("/api/auth/forgot-password", json={"email": "jane@example.com"})
        unknown = client.post(
            "/api/auth/forgot-password", json={"email": "nobody@example.com"}
        )

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json()

    def test_reset_password(self, client, mail, signup):
        signup()
        client.post("/api/auth/forgot-password", json={"email": "jane@example.com"})

        response = client.post(
            "/api/auth/reset-password",
            json={"token": mail.last_token(), "password": "a-brand-new-password"},
        )

        assert response.status_code == 200
        assert _login(client, password="a-brand-new-password").status_code == 200

    def test_reset_with_bad_token(self, client):
        response = client.post(
            "/api/auth/reset-password",
            json={"token": "0" * 64, "password": "a-brand-new-password"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "token"


class TestSession:

    def test_refresh(self, client, signup):
        signup()
        refresh_token = _login(client).json()["data"]["refreshToken"]

        response = client.post("/api/auth/refresh-token", json={"refreshToken": refresh_token})

        assert response.status_code == 200
        assert response.json()["data"]["accessToken"]

    def test_refresh_invalid(self, client):
        response = client.post("/api/auth/refresh-token", json={"refreshToken": "nope"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_REFRESH_TOKEN"

    def test_me(self, client, signup):
        user = signup()

        response = client.get("/api/auth/me", headers=auth_headers(user["id"]))

        assert response.status_code == 200
        assert response.json()["data"]["user"]["isEmailVerified"] is True

    def test_me_without_token(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["success"] is False

    def test_me_with_expired_token(self, client, signup):
        user = signup()
        token = create_test_token(user["id"], expired=True)

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_EXPIRED"

    def test_token_for_unknown_user(self, client):
        response = client.get("/api/auth/me", headers=auth_headers("ghost"))

        assert response.status_code == 401

    def test_session(self, client, signup):
        user = signup()

        anonymous = client.get("/api/auth/session")
        garbage = client.get("/api/auth/session", headers={"Authorization": "Bearer junk"})
        active = client.get("/api/auth/session", headers=auth_headers(user["id"]))

        assert anonymous.json()["data"] == {"authenticated": False}
        assert garbage.json()["data"] == {"authenticated": False}
        assert active.json()["data"]["authenticated"] is True
        assert active.json()["data"]["user"]["id"] == user["id"]

    def test_logout(self, client, identity, signup):
        user = signup()
        headers = auth_headers(user["id"])

        response = client.post("/api/auth/logout", headers=headers)

        assert response.status_code == 200
        assert identity.signed_out == [headers["Authorization"].split()[1]]
