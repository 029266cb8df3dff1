from datetime import datetime, timedelta, timezone

from chakravya.practice.models import UserProgress


def _task_id(client, category="chanting"):
    return next(t["id"] for t in client.get("/api/spiritual-tasks").json() if t["category"] == category)


def test_progress_requires_session(client):
    assert client.get("/api/user-progress").status_code == 401
    assert client.post("/api/user-progress", json={"taskId": "x", "target": 1}).status_code == 401


def test_upsert_keeps_one_row_per_user_and_task(client, user, db):
    tid = _task_id(client)
    first = client.post("/api/user-progress", json={"taskId": tid, "target": 10, "completed": 3})
    second = client.post("/api/user-progress", json={"taskId": tid, "target": 10, "completed": 7})
    assert first.status_code == 200 and second.status_code == 200
    assert first.json()["id"] == second.json()["id"]
    assert second.json()["completed"] == 7

    rows = db.query(UserProgress).filter_by(user_id=user.id, task_id=tid).all()
    assert len(rows) == 1
    assert (rows[0].target, rows[0].completed) == (10, 7)


def test_progress_listing_joins_task(client, user):
    chant, read = _task_id(client, "chanting"), _task_id(client, "reading")
    client.post("/api/user-progress", json={"taskId": chant, "target": 16, "completed": 4})
    client.post("/api/user-progress", json={"taskId": read, "target": 1})

    rows = client.get("/api/user-progress").json()
    assert len(rows) == 2
    by_task = {r["taskId"]: r for r in rows}
    assert by_task[chant]["task"]["unit"] == "rounds"
    assert by_task[read]["completed"] == 0


def test_progress_is_private(client, other_client, user):
    tid = _task_id(client)
    client.post("/api/user-progress", json={"taskId": tid, "target": 5, "completed": 5})
    assert other_client.get("/api/user-progress").json() == []


def test_progress_for_day(client, user):
    tid = _task_id(client)
    client.post("/api/user-progress", json={"taskId": tid, "target": 5, "completed": 1})
    today = datetime.now(timezone.utc).date()

    assert len(client.get("/api/user-progress", params={"date": today.isoformat()}).json()) == 1
    yesterday = today - timedelta(days=1)
    assert client.get("/api/user-progress", params={"date": yesterday.isoformat()}).json() == []


def test_unknown_task(client, user):
    r = client.post("/api/user-progress", json={"taskId": "nope", "target": 1})
    assert r.status_code == 404


def test_negative_counts_rejected(client, user):
    tid = _task_id(client)
    r = client.post("/api/user-progress", json={"taskId": tid, "target": -1, "completed": 0})
    assert r.status_code == 400
