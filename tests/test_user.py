from app.security.passwords import verify_password
from app.users import models as user_models
from conftest import register_and_login


def _stored_hash(db, email):
    db.expire_all()
    return db.query(user_models.User).filter(user_models.User.email == email).one().hashed_password


class TestProfile:
    def test_get_profile_strips_password(self, client, alice):
        response = client.get("/user", headers=alice)
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == "alice@example.com"
        assert user["name"] == "Alice"
        assert set(user) == {"id", "email", "name", "createdAt", "updatedAt"}

    def test_update_name_and_email(self, client, alice):
        response = client.patch(
            "/user", json={"name": "Alicia", "email": "alicia@example.com"}, headers=alice
        )
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["name"] == "Alicia"
        assert user["email"] == "alicia@example.com"

    def test_email_taken_by_someone_else(self, client, alice, bob):
        response = client.patch("/user", json={"email": "bob@example.com"}, headers=alice)
        assert response.status_code == 400
        assert response.json()["detail"] == "Email already in use"

    def test_invalid_email(self, client, alice):
        response = client.patch("/user", json={"email": "nope"}, headers=alice)
        assert response.status_code == 400

    def test_deleted_user_is_not_found(self, client, db, alice):
        db.query(user_models.User).delete()
        db.commit()
        response = client.get("/user", headers=alice)
        assert response.status_code == 404


class TestPasswordChange:
    def test_change_password(self, client, db, alice):
        response = client.post(
            "/user/password",
            json={"currentPassword": "password123", "newPassword": "brand-new-pass"},
            headers=alice,
        )
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert verify_password("brand-new-pass", _stored_hash(db, "alice@example.com"))

        # Old password no longer logs in, new one does
        response = client.post(
            "/auth/token",
            data={"username": "alice@example.com", "password": "password123"},
        )
        assert response.status_code == 401
        response = client.post(
            "/auth/token",
            data={"username": "alice@example.com", "password": "brand-new-pass"},
        )
        assert response.status_code == 200

    def test_wrong_current_password_keeps_hash(self, client, db, alice):
        before = _stored_hash(db, "alice@example.com")

        response = client.post(
            "/user/password",
            json={"currentPassword": "not-it", "newPassword": "brand-new-pass"},
            headers=alice,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Current password is incorrect"
        assert _stored_hash(db, "alice@example.com") == before

    def test_new_password_too_short(self, client, alice):
        response = client.post(
            "/user/password",
            json={"currentPassword": "password123", "newPassword": "short"},
            headers=alice,
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "newPassword"

    def test_other_user_unaffected(self, client, db):
        headers = register_and_login(client, "frank@example.com", password="frank-pass-1")
        register_and_login(client, "gina@example.com", password="gina-pass-1")
        gina_before = _stored_hash(db, "gina@example.com")

        response = client.post(
            "/user/password",
            json={"currentPassword": "frank-pass-1", "newPassword": "frank-pass-2"},
            headers=headers,
        )
        assert response.status_code == 200
        assert _stored_hash(db, "gina@example.com") == gina_before

    def test_null_name_is_rejected(self, client, alice):
        response = client.patch("/user", json={"name": None}, headers=alice)
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "name"
