from fastapi.testclient import TestClient
from liftlog.main import app
import uuid

client = TestClient(app)
PWD = "StrongPassw0rd!"

def login_headers():
    email = f"{uuid.uuid4().hex[:10]}@ex.com"
    client.post("/auth/register", json={"email": email, "name": "S", "password": PWD})
    token = client.post("/auth/login", json={"email": email, "password": PWD}).json()["access_token"]
    return {"Authorization": f"Bearer {token}"}

def active_session(H):
    wid = client.post("/workouts", headers=H, json={
        "name": "Upper",
        "exercises": [{"name": "bench", "target_sets": 3}, {"name": "row", "target_sets": 3}],
    }).json()["id"]
    return client.post("/sessions", headers=H, json={"workout_id": wid}).json()["id"]

def record(H, sid, exercise="bench", reps=8, **extra):
    return client.post(f"/sessions/{sid}/sets", headers=H, json={"exercise_name": exercise, "reps": reps, **extra})

def numbers(H, sid, exercise):
    sets = client.get(f"/sessions/{sid}/sets", headers=H).json()
    return [s["set_number"] for s in sets if s["exercise_name"] == exercise]

def test_set_numbers_follow_record_and_delete():
    H = login_headers()
    sid = active_session(H)

    first = record(H, sid, reps=8, weight=10)
    assert first.status_code == 201, first.text
    assert first.json()["set_number"] == 1
    second = record(H, sid, reps=8, weight=10)
    assert second.json()["set_number"] == 2

    assert client.delete(f"/sets/{first.json()['id']}", headers=H).status_code == 204
    sets = client.get(f"/sessions/{sid}/sets", headers=H).json()
    assert [(s["id"], s["set_number"]) for s in sets] == [(second.json()["id"], 1)]

def test_numbering_is_per_exercise():
    H = login_headers()
    sid = active_session(H)
    record(H, sid, "bench"); record(H, sid, "row"); record(H, sid, "bench")
    assert numbers(H, sid, "bench") == [1, 2]
    assert numbers(H, sid, "row") == [1]

def test_delete_middle_set_renumbers_later_sets_only():
    H = login_headers()
    sid = active_session(H)
    ids = [record(H, sid, "bench", reps=r).json()["id"] for r in (5, 6, 7, 8)]
    record(H, sid, "row")

    client.delete(f"/sets/{ids[1]}", headers=H)
    sets = client.get(f"/sessions/{sid}/sets", headers=H).json()
    bench = [(s["reps"], s["set_number"]) for s in sets if s["exercise_name"] == "bench"]
    assert bench == [(5, 1), (7, 2), (8, 3)]
    assert numbers(H, sid, "row") == [1]

def test_toggle_completed_stamps_and_clears_completed_at():
    H = login_headers()
    sid = active_session(H)
    set_id = record(H, sid).json()["id"]

    r = client.patch(f"/sets/{set_id}", headers=H, json={"completed": True})
    assert r.status_code == 200
    assert r.json()["completed"] is True
    assert r.json()["completed_at"] is not None

    r = client.patch(f"/sets/{set_id}", headers=H, json={"completed": False})
    assert r.json()["completed"] is False
    assert r.json()["completed_at"] is None

def test_complete_set_shortcut():
    H = login_headers()
    sid = active_session(H)
    set_id = record(H, sid).json()["id"]
    r = client.post(f"/sets/{set_id}/complete", headers=H)
    assert r.status_code == 200
    assert r.json()["completed"] is True and r.json()["completed_at"] is not None

def test_record_completed_set_is_stamped():
    H = login_headers()
    sid = active_session(H)
    body = record(H, sid, completed=True).json()
    assert body["completed"] is True
    assert body["completed_at"] is not None

def test_patch_only_changes_sent_fields():
    H = login_headers()
    sid = active_session(H)
    set_id = record(H, sid, reps=8, weight=50).json()["id"]

    r = client.patch(f"/sets/{set_id}", headers=H, json={"reps": 10})
    assert (r.json()["reps"], r.json()["weight"]) == (10, 50)

    r = client.patch(f"/sets/{set_id}", headers=H, json={"weight": None})
    assert (r.json()["reps"], r.json()["weight"]) == (10, None)

def test_invalid_set_payloads():
    H = login_headers()
    sid = active_session(H)
    assert record(H, sid, reps=-1).status_code == 422
    assert record(H, sid, weight=-2.5).status_code == 422
    assert record(H, sid, exercise="   ").status_code == 422

    set_id = record(H, sid).json()["id"]
    assert client.patch(f"/sets/{set_id}", headers=H, json={"reps": None}).status_code == 422

def test_unknown_exercise_rejected_while_template_exists():
    H = login_headers()
    sid = active_session(H)
    r = record(H, sid, "curl")
    assert r.status_code == 422
    assert r.json()["code"] == "validation_error"

def test_sets_are_frozen_after_session_ends():
    H = login_headers()
    sid = active_session(H)
    set_id = record(H, sid).json()["id"]
    assert client.post(f"/sessions/{sid}/complete", headers=H).status_code == 200

    responses = [
        record(H, sid),
        client.patch(f"/sets/{set_id}", headers=H, json={"reps": 1}),
        client.post(f"/sets/{set_id}/complete", headers=H),
        client.delete(f"/sets/{set_id}", headers=H),
    ]
    for r in responses:
        assert r.status_code == 409
        assert r.json()["code"] == "invalid_state"
    assert numbers(H, sid, "bench") == [1]

def test_sets_of_cancelled_session_are_frozen():
    H = login_headers()
    sid = active_session(H)
    set_id = record(H, sid).json()["id"]
    client.post(f"/sessions/{sid}/cancel", headers=H)
    assert client.patch(f"/sets/{set_id}", headers=H, json={"completed": True}).status_code == 409

def test_other_user_cannot_touch_sets():
    owner, other = login_headers(), login_headers()
    sid = active_session(owner)
    set_id = record(owner, sid).json()["id"]

    assert record(other, sid).status_code == 403
    assert client.get(f"/sessions/{sid}/sets", headers=other).status_code == 403
    assert client.patch(f"/sets/{set_id}", headers=other, json={"reps": 1}).status_code == 403
    assert client.delete(f"/sets/{set_id}", headers=other).status_code == 403

def test_missing_set_or_session_404():
    H = login_headers()
    assert record(H, 999999).status_code == 404
    assert client.patch("/sets/999999", headers=H, json={"reps": 1}).status_code == 404
    assert client.delete("/sets/999999", headers=H).status_code == 404

def test_progress_counts_completed_sets_against_targets():
    H = login_headers()
    sid = active_session(H)
    done = record(H, sid, "bench", completed=True).json()["id"]
    record(H, sid, "bench")

    r = client.get(f"/sessions/{sid}/progress", headers=H)
    assert r.status_code == 200
    body = r.json()
    assert body["template_available"] is True
    assert [(e["exercise_name"], e["completed_count"], e["target_count"]) for e in body["exercises"]] == [
        ("bench", 1, 3), ("row", 0, 3),
    ]
    assert (body["completed_count"], body["target_count"]) == (1, 6)
    assert body["percent"] == 16.7

    client.patch(f"/sets/{done}", headers=H, json={"completed": False})
    assert client.get(f"/sessions/{sid}/progress", headers=H).json()["completed_count"] == 0

def test_weight_keeps_its_precision():
    H = login_headers()
    sid = active_session(H)
    set_id = record(H, sid, weight=22.675).json()["id"]
    sets = client.get(f"/sessions/{sid}/sets", headers=H).json()
    assert [s["weight"] for s in sets if s["id"] == set_id] == [22.675]

    r = client.patch(f"/sets/{set_id}", headers=H, json={"weight": 101.125})
    assert r.json()["weight"] == 101.125
