from chakravya.auth.service import create_user
from chakravya.contact.models import ContactSubmission
from conftest import PASSWORD, login


def test_contact_submission_is_stored_unread(client, db):
    r = client.post("/api/contact", json={"name": "A", "email": "a@b.com", "message": "hi"})
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "unread"

    stored = db.get(ContactSubmission, body["id"])
    assert (stored.name, stored.email, stored.message, stored.status) == ("A", "a@b.com", "hi", "unread")


def test_contact_validation(client, db):
    r = client.post("/api/contact", json={"name": "", "email": "nope", "message": "hi"})
    assert r.status_code == 400
    assert {e["loc"][-1] for e in r.json()["errors"]} == {"name", "email"}
    assert db.query(ContactSubmission).count() == 0


def test_inbox_is_admin_only(client, user):
    client.post("/api/contact", json={"name": "A", "email": "a@b.com", "message": "hi"})
    assert client.get("/api/contact").status_code == 403
    client.post("/api/auth/logout")
    assert client.get("/api/contact").status_code == 401


def test_admin_can_read_and_mark(client, db):
    create_user(db, "admin@example.com", PASSWORD, role="admin")
    sub = client.post("/api/contact", json={"name": "B", "email": "b@c.com", "message": "hare krishna"}).json()
    login(client, "admin@example.com")

    inbox = client.get("/api/contact").json()
    assert [s["id"] for s in inbox] == [sub["id"]]

    r = client.patch(f"/api/contact/{sub['id']}", json={"status": "replied"})
    assert r.status_code == 200 and r.json()["status"] == "replied"

    assert client.patch(f"/api/contact/{sub['id']}", json={"status": "archived"}).status_code == 400
    assert client.patch("/api/contact/missing", json={"status": "read"}).status_code == 404
