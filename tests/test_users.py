"""
Test suite for user endpoints.

Tests cover:
- Admin-only user creation and listing
- Self-or-admin access to /users/{username}
- Job applications
"""

USERS_URL = "/api/v1/users/"

NEW_USER = {
    "username": "u-new",
    "firstName": "First-new",
    "lastName": "Last-newL",
    "password": "password-new",
    "email": "new@email.com",
    "isAdmin": False,
}

U1 = {
    "username": "u1",
    "firstName": "U1F",
    "lastName": "U1L",
    "email": "user1@user.com",
    "isAdmin": False,
}


def login(client, username, password):
    return client.post("/api/v1/auth/token", json={"username": username, "password": password})


class TestUserCreation:
    """Tests for POST /users"""

    def test_create_user_as_admin(self, client, seed, admin_headers):
        response = client.post(USERS_URL, json=NEW_USER, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["user"] == {k: v for k, v in NEW_USER.items() if k != "password"}
        assert isinstance(body["token"], str)

    def test_create_admin_as_admin(self, client, seed, admin_headers):
        response = client.post(USERS_URL, json={**NEW_USER, "isAdmin": True}, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["user"]["isAdmin"] is True

    def test_create_as_user(self, client, seed, user_headers):
        response = client.post(USERS_URL, json=NEW_USER, headers=user_headers)
        assert response.status_code == 401

    def test_create_as_anon(self, client, seed):
        response = client.post(USERS_URL, json=NEW_USER)
        assert response.status_code == 401

    def test_missing_data(self, client, seed, admin_headers):
        response = client.post(USERS_URL, json={"username": "u-new"}, headers=admin_headers)
        assert response.status_code == 400

    def test_invalid_email(self, client, seed, admin_headers):
        response = client.post(USERS_URL, json={**NEW_USER, "email": "not-an-email"}, headers=admin_headers)
        assert response.status_code == 400

    def test_invalid_data_as_user(self, client, seed, user_headers):
        """Authorization is checked before the body"""
        response = client.post(USERS_URL, json={"username": "u-new"}, headers=user_headers)
        assert response.status_code == 401


class TestUserListing:
    """Tests for GET /users"""

    def test_list_as_admin(self, client, seed, admin_headers):
        response = client.get(USERS_URL, headers=admin_headers)

        assert response.status_code == 200
        users = response.json()["users"]
        assert [u["username"] for u in users] == ["admin", "u1", "u2", "u3"]
        assert users[1] == U1

    def test_list_as_user(self, client, seed, user_headers):
        assert client.get(USERS_URL, headers=user_headers).status_code == 401

    def test_list_as_anon(self, client, seed):
        assert client.get(USERS_URL).status_code == 401

    def test_invalid_token(self, client, seed):
        response = client.get(USERS_URL, headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401


class TestUserDetail:
    """Tests for GET /users/{username}"""

    def test_get_self(self, client, seed, user_headers):
        response = client.get(f"{USERS_URL}u1", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"user": {**U1, "jobs": []}}

    def test_get_as_admin(self, client, seed, admin_headers):
        response = client.get(f"{USERS_URL}u1", headers=admin_headers)
        assert response.json() == {"user": {**U1, "jobs": []}}

    def test_get_other_user(self, client, seed, user_headers):
        assert client.get(f"{USERS_URL}u2", headers=user_headers).status_code == 401

    def test_get_missing_user_as_user(self, client, seed, user_headers):
        """Non-admins learn nothing about other usernames"""
        assert client.get(f"{USERS_URL}nope", headers=user_headers).status_code == 401

    def test_get_missing_user_as_admin(self, client, seed, admin_headers):
        assert client.get(f"{USERS_URL}nope", headers=admin_headers).status_code == 404

    def test_get_as_anon(self, client, seed):
        assert client.get(f"{USERS_URL}u1").status_code == 401


class TestUserUpdate:
    """Tests for PATCH /users/{username}"""

    def test_update_self(self, client, seed, user_headers):
        response = client.patch(f"{USERS_URL}u1", json={"firstName": "New"}, headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"user": {**U1, "firstName": "New"}}

    def test_update_as_admin(self, client, seed, admin_headers):
        response = client.patch(f"{USERS_URL}u1", json={"firstName": "New"}, headers=admin_headers)
        assert response.json()["user"]["firstName"] == "New"

    def test_update_other_user(self, client, seed, user_headers):
        response = client.patch(f"{USERS_URL}u2", json={"firstName": "Nope"}, headers=user_headers)
        assert response.status_code == 401

    def test_update_as_anon(self, client, seed):
        response = client.patch(f"{USERS_URL}u1", json={"firstName": "Nope"})
        assert response.status_code == 401

    def test_update_missing_user_as_admin(self, client, seed, admin_headers):
        response = client.patch(f"{USERS_URL}nope", json={"firstName": "Nope"}, headers=admin_headers)
        assert response.status_code == 404

    def test_invalid_data(self, client, seed, admin_headers):
        response = client.patch(f"{USERS_URL}u1", json={"firstName": 42}, headers=admin_headers)
        assert response.status_code == 400

    def test_cannot_grant_admin(self, client, seed, user_headers):
        response = client.patch(f"{USERS_URL}u1", json={"isAdmin": True}, headers=user_headers)
        assert response.status_code == 400

    def test_set_password(self, client, seed, user_headers):
        response = client.patch(f"{USERS_URL}u1", json={"password": "new-password"}, headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"user": U1}
        assert login(client, "u1", "new-password").status_code == 200
        assert login(client, "u1", "password1").status_code == 401


class TestUserDeletion:
    """Tests for DELETE /users/{username}"""

    def test_delete_self(self, client, seed, user_headers):
        response = client.delete(f"{USERS_URL}u1", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "u1"}

    def test_delete_as_admin(self, client, seed, admin_headers):
        response = client.delete(f"{USERS_URL}u1", headers=admin_headers)
        assert response.json() == {"deleted": "u1"}

    def test_delete_other_user(self, client, seed, user_headers):
        assert client.delete(f"{USERS_URL}u2", headers=user_headers).status_code == 401

    def test_delete_as_anon(self, client, seed):
        assert client.delete(f"{USERS_URL}u1").status_code == 401

    def test_delete_missing_user_as_admin(self, client, seed, admin_headers):
        assert client.delete(f"{USERS_URL}nope", headers=admin_headers).status_code == 404


class TestJobApplications:
    """Tests for POST /users/{username}/jobs/{id}"""

    def test_apply_as_self(self, client, seed, user_headers):
        job_id = seed["job_ids"][1]
        response = client.post(f"{USERS_URL}u1/jobs/{job_id}", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"applied": job_id}
        assert client.get(f"{USERS_URL}u1", headers=user_headers).json()["user"]["jobs"] == [job_id]

    def test_apply_as_admin(self, client, seed, admin_headers):
        job_id = seed["job_ids"][1]
        response = client.post(f"{USERS_URL}u1/jobs/{job_id}", headers=admin_headers)
        assert response.json() == {"applied": job_id}

    def test_apply_as_anon(self, client, seed):
        assert client.post(f"{USERS_URL}u1/jobs/{seed['job_ids'][1]}").status_code == 401

    def test_apply_for_other_user(self, client, seed, user_headers):
        response = client.post(f"{USERS_URL}u2/jobs/{seed['job_ids'][0]}", headers=user_headers)
        assert response.status_code == 401

    def test_non_numeric_job_id(self, client, seed, user_headers):
        assert client.post(f"{USERS_URL}u1/jobs/nope", headers=user_headers).status_code == 400

    def test_non_numeric_job_id_as_anon(self, client, seed):
        assert client.post(f"{USERS_URL}u1/jobs/nope").status_code == 401

    def test_missing_user_as_admin(self, client, seed, admin_headers):
        response = client.post(f"{USERS_URL}nope/jobs/{seed['job_ids'][0]}", headers=admin_headers)
        assert response.status_code == 404

    def test_missing_job(self, client, seed, user_headers):
        assert client.post(f"{USERS_URL}u1/jobs/-1", headers=user_headers).status_code == 404

    def test_apply_twice(self, client, seed, user_headers):
        job_id = seed["job_ids"][0]
        client.post(f"{USERS_URL}u1/jobs/{job_id}", headers=user_headers)

        response = client.post(f"{USERS_URL}u1/jobs/{job_id}", headers=user_headers)
        assert response.status_code == 400
