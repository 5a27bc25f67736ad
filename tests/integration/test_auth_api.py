"""End-to-end tests for the authentication HTTP API."""

import pytest

from src.auth.jwt import create_access_token

LOGIN_URL = "/api/v1/auth/login"
COMPANY_URL = "/api/v1/auth/register/company"
CANDIDATE_URL = "/api/v1/auth/register/candidate"
ME_URL = "/api/v1/auth/me"

RESPONSE_FIELDS = {
    "access_token",
    "refresh_token",
    "token_type",
    "expires_in",
    "email",
    "firstName",
    "lastName",
    "role",
    "userType",
}


class TestRegisterCompany:
    """Tests for POST /register/company."""

    @pytest.mark.asyncio
    async def test_success(self, client, company_payload):
        response = await client.post(COMPANY_URL, json=company_payload)

        assert response.status_code == 200
        body = response.json()
        assert set(body) == RESPONSE_FIELDS
        assert body["email"] == "company@test.com"
        assert body["firstName"] == "John"
        assert body["lastName"] == "Doe"
        assert body["role"] == "ROLE_COMPANY"
        assert body["userType"] == "COMPANY"
        assert body["token_type"] == "Bearer"
        assert body["expires_in"] == 86400
        assert body["access_token"]
        assert body["refresh_token"]

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client, company_payload):
        await client.post(COMPANY_URL, json=company_payload)

        response = await client.post(COMPANY_URL, json=company_payload)

        assert response.status_code == 409
        assert "company@test.com" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_missing_field(self, client, company_payload):
        del company_payload["companyName"]

        response = await client.post(COMPANY_URL, json=company_payload)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_weak_password(self, client, company_payload):
        company_payload["password"] = "abc12!"

        response = await client.post(COMPANY_URL, json=company_payload)

        assert response.status_code == 400
        assert "Password" in response.json()["detail"]


class TestRegisterCandidate:
    """Tests for POST /register/candidate."""

    @pytest.mark.asyncio
    async def test_register_then_login_rotates_refresh_token(self, client):
        payload = {
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "candidate@test.com",
            "password": "Test123@password",
            "phoneNumber": "+1234567890",
        }

        registered = await client.post(CANDIDATE_URL, json=payload)

        assert registered.status_code == 200
        assert registered.json()["role"] == "ROLE_CANDIDATE"
        assert registered.json()["userType"] == "CANDIDATE"
        assert registered.json()["access_token"]
        assert registered.json()["refresh_token"]

        login = await client.post(
            LOGIN_URL,
            json={"email": "candidate@test.com", "password": "Test123@password"},
        )

        assert login.status_code == 200
        assert login.json()["email"] == "candidate@test.com"
        assert login.json()["role"] == "ROLE_CANDIDATE"
        assert login.json()["refresh_token"] != registered.json()["refresh_token"]

    @pytest.mark.asyncio
    async def test_same_email_as_company(self, client, company_payload, candidate_payload):
        candidate_payload["email"] = company_payload["email"]
        await client.post(COMPANY_URL, json=company_payload)

        response = await client.post(CANDIDATE_URL, json=candidate_payload)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_invalid_phone(self, client, candidate_payload):
        candidate_payload["phoneNumber"] = "0123456789"

        response = await client.post(CANDIDATE_URL, json=candidate_payload)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_failed_registration_leaves_no_user(self, client, candidate_payload):
        candidate_payload["phoneNumber"] = "12"
        await client.post(CANDIDATE_URL, json=candidate_payload)

        candidate_payload["phoneNumber"] = "+1234567890"
        response = await client.post(CANDIDATE_URL, json=candidate_payload)

        assert response.status_code == 200


class TestLogin:
    """Tests for POST /login."""

    @pytest.mark.asyncio
    async def test_wrong_password(self, client, company_payload):
        await client.post(COMPANY_URL, json=company_payload)

        response = await client.post(
            LOGIN_URL,
            json={"email": company_payload["email"], "password": "Wrong123@password"},
        )

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_unknown_user(self, client):
        response = await client.post(
            LOGIN_URL,
            json={"email": "nobody@test.com", "password": "Test123@password"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_malformed_body(self, client):
        response = await client.post(LOGIN_URL, json={"email": "nobody@test.com"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_company_login(self, client, company_payload):
        await client.post(COMPANY_URL, json=company_payload)

        response = await client.post(
            LOGIN_URL,
            json={"email": company_payload["email"], "password": company_payload["password"]},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "ROLE_COMPANY"
        assert response.json()["userType"] == "COMPANY"


class TestCurrentUser:
    """Tests for token-protected routes."""

    @pytest.mark.asyncio
    async def test_me(self, client, candidate_payload):
        registered = await client.post(CANDIDATE_URL, json=candidate_payload)
        token = registered.json()["access_token"]

        response = await client.get(ME_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "candidate@test.com"
        assert body["userType"] == "CANDIDATE"
        assert body["roles"] == ["ROLE_CANDIDATE"]

    @pytest.mark.asyncio
    async def test_me_without_token(self, client):
        response = await client.get(ME_URL)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_with_refresh_token(self, client, candidate_payload):
        registered = await client.post(CANDIDATE_URL, json=candidate_payload)
        token = registered.json()["refresh_token"]

        response = await client.get(ME_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_admin_route_requires_admin_role(self, client, candidate_payload):
        registered = await client.post(CANDIDATE_URL, json=candidate_payload)
        token = registered.json()["access_token"]

        response = await client.get(
            "/api/v1/auth/admin/ping", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_route_with_admin_token(self, client):
        token = create_access_token("admin@test.com", ["ROLE_ADMIN"])

        response = await client.get(
            "/api/v1/auth/admin/ping", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200


class TestHealth:
    """Tests for service endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
