"""
MedDent - Auth tests
Tests: admin JWT login/session, CRM session login/logout/expiry, staff
gate, CRM user management, password hashing.
Run: cd backend && pytest tests/test_auth.py -v
"""

from datetime import timedelta

from jose import jwt

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, CRM_PASSWORD, CRM_USERNAME
from tests.helpers import _db_op


class TestPasswordHashing:
    def test_roundtrip(self):
        from config import hash_password, verify_password
        hashed = hash_password("s3cret!")
        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_malformed_hash(self):
        from config import verify_password
        assert verify_password("s3cret!", "not-a-bcrypt-hash") is False
        assert verify_password("s3cret!", "") is False


class TestAdminAuth:
    def test_login(self, client, admin_headers, db):
        admin = _db_op(db.admin_users.find_one({"email": ADMIN_EMAIL}))
        assert admin["last_login"] is not None

    def test_token_claims(self, client, admin_headers):
        from config import JWT_ALGORITHM, JWT_SECRET
        token = admin_headers["Authorization"].split(" ", 1)[1]
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        assert payload["email"] == ADMIN_EMAIL
        assert "sub" in payload and "exp" in payload

    def test_login_case_insensitive_email(self, client, admin_headers):
        r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD})
        assert r.status_code == 200

    def test_wrong_password(self, client, admin_headers):
        r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})
        assert r.status_code == 401

    def test_unknown_email(self, client):
        r = client.post("/api/auth/login", json={"email": "ghost@meddent.test", "password": "x"})
        assert r.status_code == 401

    def test_empty_fields(self, client):
        r = client.post("/api/auth/login", json={"email": "", "password": ""})
        assert r.status_code == 400

    def test_inactive_admin(self, client, admin_headers, db):
        _db_op(db.admin_users.update_one({"email": ADMIN_EMAIL}, {"$set": {"is_active": False}}))
        r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        assert r.status_code == 401
        assert client.get("/api/auth/session", headers=admin_headers).status_code == 401

    def test_session(self, client, admin_headers):
        r = client.get("/api/auth/session", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["user"]["email"] == ADMIN_EMAIL

    def test_session_without_token(self, client):
        assert client.get("/api/auth/session").status_code == 401

    def test_malformed_token(self, client):
        r = client.get("/api/auth/session", headers={"Authorization": "Bearer not.a.jwt"})
        assert r.status_code == 401

    def test_expired_token(self, client, admin_headers, db):
        from config import JWT_ALGORITHM, JWT_SECRET, utc_now
        admin = _db_op(db.admin_users.find_one({"email": ADMIN_EMAIL}))
        token = jwt.encode(
            {"sub": admin["id"], "email": ADMIN_EMAIL, "exp": utc_now() - timedelta(minutes=1)},
            JWT_SECRET, algorithm=JWT_ALGORITHM
        )
        r = client.get("/api/auth/session", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401

    def test_foreign_secret(self, client, admin_headers, db):
        from config import utc_now
        admin = _db_op(db.admin_users.find_one({"email": ADMIN_EMAIL}))
        token = jwt.encode(
            {"sub": admin["id"], "email": ADMIN_EMAIL, "exp": utc_now() + timedelta(hours=1)},
            "some-other-secret-of-sufficient-length!!", algorithm="HS256"
        )
        r = client.get("/api/auth/session", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401

    def test_logout(self, client, admin_headers):
        assert client.post("/api/auth/logout", headers=admin_headers).status_code == 200


class TestCrmAuth:
    def test_login_and_session(self, client, crm_headers):
        r = client.get("/api/crm-session", headers=crm_headers)
        assert r.status_code == 200
        assert r.json()["user"]["username"] == CRM_USERNAME

    def test_wrong_password(self, client, crm_headers):
        r = client.post("/api/crm-login", json={"username": CRM_USERNAME, "password": "wrong"})
        assert r.status_code == 401

    def test_logout_ends_session(self, client, crm_headers):
        assert client.post("/api/crm-logout", headers=crm_headers).status_code == 200
        assert client.get("/api/crm-session", headers=crm_headers).status_code == 401

    def test_expired_session(self, client, crm_headers, db):
        from config import utc_now
        past = (utc_now() - timedelta(minutes=1)).isoformat()
        _db_op(db.crm_sessions.update_many({}, {"$set": {"expires_at": past}}))
        assert client.get("/api/crm-session", headers=crm_headers).status_code == 401

    def test_session_lifetime(self, client, admin_headers, crm_headers, db):
        from config import parse_iso
        session = _db_op(db.crm_sessions.find_one({}))
        lifetime = parse_iso(session["expires_at"]) - parse_iso(session["created_at"])
        assert timedelta(hours=7, minutes=59) < lifetime <= timedelta(hours=8, seconds=1)

    def test_admin_token_is_not_crm_session(self, client, admin_headers):
        assert client.get("/api/crm-session", headers=admin_headers).status_code == 401


class TestStaffGate:
    def test_crm_token_accepted(self, client, crm_headers):
        assert client.get("/api/crm/dashboard", headers=crm_headers).status_code == 200

    def test_admin_token_accepted(self, client, admin_headers):
        assert client.get("/api/crm/dashboard", headers=admin_headers).status_code == 200

    def test_garbage_rejected(self, client):
        r = client.get("/api/crm/dashboard", headers={"Authorization": "Bearer garbage"})
        assert r.status_code == 401


class TestCrmUserManagement:
    def test_password_hash_never_returned(self, client, admin_headers, crm_headers):
        r = client.get("/api/crm-users", headers=admin_headers)
        assert r.status_code == 200
        users = r.json()["data"]
        assert [u["username"] for u in users] == [CRM_USERNAME]
        assert "password_hash" not in users[0]

    def test_stored_as_bcrypt(self, client, admin_headers, crm_headers, db):
        user = _db_op(db.crm_users.find_one({"username": CRM_USERNAME}))
        assert user["password_hash"].startswith("$2")
        assert CRM_PASSWORD not in user["password_hash"]

    def test_duplicate_username(self, client, admin_headers, crm_headers):
        r = client.post("/api/crm-users", json={"username": CRM_USERNAME, "password": "another1"},
                        headers=admin_headers)
        assert r.status_code == 400

    def test_short_password(self, client, admin_headers):
        r = client.post("/api/crm-users", json={"username": "new", "password": "123"}, headers=admin_headers)
        assert r.status_code == 422

    def test_requires_admin(self, client, crm_headers):
        assert client.get("/api/crm-users", headers=crm_headers).status_code == 401

    def test_deactivate_ends_sessions(self, client, admin_headers, crm_headers, db):
        user = _db_op(db.crm_users.find_one({"username": CRM_USERNAME}))
        r = client.put(f"/api/crm-users/{user['id']}", json={"is_active": False}, headers=admin_headers)
        assert r.status_code == 200
        assert client.get("/api/crm-session", headers=crm_headers).status_code == 401

        r = client.post("/api/crm-login", json={"username": CRM_USERNAME, "password": CRM_PASSWORD})
        assert r.status_code == 401

    def test_password_change(self, client, admin_headers, crm_headers, db):
        user = _db_op(db.crm_users.find_one({"username": CRM_USERNAME}))
        client.put(f"/api/crm-users/{user['id']}", json={"password": "brand-new-pass"}, headers=admin_headers)

        assert client.post("/api/crm-login", json={"username": CRM_USERNAME, "password": CRM_PASSWORD}).status_code == 401
        assert client.post("/api/crm-login", json={"username": CRM_USERNAME, "password": "brand-new-pass"}).status_code == 200

    def test_blank_username_update_rejected(self, client, admin_headers, crm_headers, db):
        user = _db_op(db.crm_users.find_one({"username": CRM_USERNAME}))
        for blank in ["", "   "]:
            r = client.put(f"/api/crm-users/{user['id']}", json={"username": blank}, headers=admin_headers)
            assert r.status_code == 422
        assert _db_op(db.crm_users.find_one({"id": user["id"]}))["username"] == CRM_USERNAME

    def test_username_update_trimmed(self, client, admin_headers, crm_headers, db):
        user = _db_op(db.crm_users.find_one({"username": CRM_USERNAME}))
        r = client.put(f"/api/crm-users/{user['id']}", json={"username": "  reception  "}, headers=admin_headers)
        assert r.status_code == 200
        assert _db_op(db.crm_users.find_one({"id": user["id"]}))["username"] == "reception"

    def test_delete(self, client, admin_headers, crm_headers, db):
        user = _db_op(db.crm_users.find_one({"username": CRM_USERNAME}))
        assert client.delete(f"/api/crm-users/{user['id']}", headers=admin_headers).status_code == 200
        assert client.get("/api/crm-session", headers=crm_headers).status_code == 401
        assert client.delete(f"/api/crm-users/{user['id']}", headers=admin_headers).status_code == 404
