from fastapi.testclient import TestClient
from app.main import app
from app.security import create_access_token
import uuid

client = TestClient(app)

def headers_for(user_id=None):
    user_id = user_id or f"user_{uuid.uuid4().hex[:10]}"
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}

def make_exercise(H, name="Squats"):
    r = client.post("/exercises", headers=H, json={"name": name, "category": "legs"})
    assert r.status_code == 201, r.text
    return r.json()["id"]

def leg_day(H):
    squats = make_exercise(H)
    r = client.post("/workouts", headers=H, json={
        "name": "Leg Day",
        "started_at": "2025-01-10T00:00:00",
        "exercises": [{"exercise_id": squats, "order": 0,
                       "sets": [{"set_number": 1, "reps": 5, "weight": 100}]}],
    })
    assert r.status_code == 201, r.text
    return r.json()

def test_create_and_read_leg_day():
    H = headers_for()
    created = leg_day(H)

    r = client.get(f"/workouts/{created['id']}", headers=H)
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Leg Day"
    assert body["started_at"].startswith("2025-01-10")
    assert body["completed_at"] is None
    [we] = body["workout_exercises"]
    assert we["order"] == 0
    assert we["exercise"]["name"] == "Squats"
    [s] = we["sets"]
    assert (s["set_number"], s["reps"], s["weight"]) == (1, 5, 100)

def test_other_user_gets_404_everywhere():
    owner, intruder = headers_for(), headers_for()
    wid = leg_day(owner)["id"]

    assert client.get(f"/workouts/{wid}", headers=intruder).status_code == 404
    assert client.patch(f"/workouts/{wid}", headers=intruder, json={"name": "x"}).status_code == 404
    assert client.post(f"/workouts/{wid}/complete", headers=intruder).status_code == 404
    assert client.delete(f"/workouts/{wid}", headers=intruder).status_code == 404
    # same answer as for an id nobody owns
    r = client.get(f"/workouts/{uuid.uuid4()}", headers=intruder)
    assert r.status_code == 404
    assert r.json() == client.get(f"/workouts/{wid}", headers=intruder).json()
    assert client.get(f"/workouts/{wid}", headers=owner).json()["name"] == "Leg Day"

def test_list_by_day_and_templates():
    H = headers_for()
    leg_day(H)
    client.post("/workouts", headers=H, json={"name": "Next", "started_at": "2025-01-11T09:00:00"})
    client.post("/workouts", headers=H, json={"name": "Template", "is_template": True})

    day = client.get("/workouts", headers=H, params={"on": "2025-01-10"}).json()
    assert [w["name"] for w in day] == ["Leg Day"]
    all_ = client.get("/workouts", headers=H).json()
    assert [w["name"] for w in all_] == ["Next", "Leg Day"]
    with_tpl = client.get("/workouts", headers=H, params={"include_templates": True}).json()
    assert "Template" in {w["name"] for w in with_tpl}

    bad = client.get("/workouts", headers=H,
                     params={"start": "2025-01-11T00:00:00", "end": "2025-01-10T00:00:00"})
    assert bad.status_code == 400

def test_list_with_mixed_offset_and_naive_bounds():
    H = headers_for()
    leg_day(H)
    r = client.get("/workouts", headers=H,
                   params={"start": "2025-01-10T00:00:00Z", "end": "2025-01-12T00:00:00"})
    assert r.status_code == 200, r.text
    assert [w["name"] for w in r.json()] == ["Leg Day"]

    reversed_ = client.get("/workouts", headers=H,
                           params={"start": "2025-01-12T00:00:00", "end": "2025-01-10T00:00:00+00:00"})
    assert reversed_.status_code == 400

def test_patch_name_only_keeps_everything_else():
    H = headers_for()
    created = leg_day(H)
    r = client.patch(f"/workouts/{created['id']}", headers=H, json={"name": "New Name"})
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "New Name"
    assert body["started_at"] == created["started_at"]
    assert body["workout_exercises"] == created["workout_exercises"]

def test_patch_null_name_clears_but_null_start_rejected():
    H = headers_for()
    wid = leg_day(H)["id"]
    r = client.patch(f"/workouts/{wid}", headers=H, json={"name": None})
    assert r.status_code == 200 and r.json()["name"] is None
    assert client.patch(f"/workouts/{wid}", headers=H, json={"started_at": None}).status_code == 422

def test_complete_is_idempotent():
    H = headers_for()
    wid = leg_day(H)["id"]
    first = client.post(f"/workouts/{wid}/complete", headers=H).json()["completed_at"]
    assert first is not None
    again = client.post(f"/workouts/{wid}/complete", headers=H).json()["completed_at"]
    assert again == first

def test_patch_null_completed_at_reopens_workout():
    H = headers_for()
    wid = leg_day(H)["id"]
    assert client.post(f"/workouts/{wid}/complete", headers=H).json()["completed_at"] is not None
    r = client.patch(f"/workouts/{wid}", headers=H, json={"completed_at": None})
    assert r.status_code == 200
    assert r.json()["completed_at"] is None
    assert r.json()["name"] == "Leg Day"

def test_delete_workout_then_404():
    H = headers_for()
    wid = leg_day(H)["id"]
    assert client.delete(f"/workouts/{wid}", headers=H).status_code == 204
    assert client.get(f"/workouts/{wid}", headers=H).status_code == 404
    assert client.delete(f"/workouts/{wid}", headers=H).status_code == 404

def test_invalid_sets_rejected_by_schema():
    H = headers_for()
    ex = make_exercise(H)
    for bad_set in ({"set_number": 0, "reps": 5}, {"set_number": 1, "reps": 0},
                    {"set_number": 1, "reps": 5, "weight": -1}, {"set_number": 1, "reps": 5, "rir": 11}):
        r = client.post("/workouts", headers=H, json={
            "exercises": [{"exercise_id": ex, "order": 0, "sets": [bad_set]}],
        })
        assert r.status_code == 422, bad_set
    dup_order = client.post("/workouts", headers=H, json={"exercises": [
        {"exercise_id": ex, "order": 0}, {"exercise_id": ex, "order": 0},
    ]})
    assert dup_order.status_code == 422

def test_weight_limited_to_two_decimal_places():
    H = headers_for()
    ex = make_exercise(H)
    def post_weight(w):
        return client.post("/workouts", headers=H, json={
            "exercises": [{"exercise_id": ex, "order": 0, "sets": [{"set_number": 1, "reps": 5, "weight": w}]}],
        })
    assert post_weight(100.555).status_code == 422
    assert post_weight(10000).status_code == 422
    ok = post_weight(62.25)
    assert ok.status_code == 201, ok.text
    assert ok.json()["workout_exercises"][0]["sets"][0]["weight"] == 62.25

def test_unknown_exercise_is_a_field_error():
    H = headers_for()
    r = client.post("/workouts", headers=H, json={
        "exercises": [{"exercise_id": str(uuid.uuid4()), "order": 0}],
    })
    assert r.status_code == 400
    assert r.json()["field"] == "exercises[0].exercise_id"

def test_exercise_catalog_rules():
    H, other = headers_for(), headers_for()
    make_exercise(H, "Bench")
    dup = client.post("/exercises", headers=H, json={"name": "Bench"})
    assert dup.status_code == 400
    assert dup.json()["field"] == "name"
    assert client.post("/exercises", headers=other, json={"name": "Bench"}).status_code == 201

    names = [e["name"] for e in client.get("/exercises", headers=H, params={"include_global": False}).json()]
    assert names == ["Bench"]

def test_delete_exercise_in_use_conflicts():
    H = headers_for()
    created = leg_day(H)
    ex_id = created["workout_exercises"][0]["exercise_id"]
    r = client.delete(f"/exercises/{ex_id}", headers=H)
    assert r.status_code == 409
    client.delete(f"/workouts/{created['id']}", headers=H)
    assert client.delete(f"/exercises/{ex_id}", headers=H).status_code == 204
    assert client.delete(f"/exercises/{ex_id}", headers=H).status_code == 404

def test_add_complete_delete_set():
    H = headers_for()
    created = leg_day(H)
    we_id = created["workout_exercises"][0]["id"]

    r = client.post(f"/workout-exercises/{we_id}/sets", headers=H, json={"set_number": 2, "reps": 4, "weight": 105})
    assert r.status_code == 201
    set_id = r.json()["id"]
    assert client.post(f"/workout-exercises/{we_id}/sets", headers=H,
                       json={"set_number": 2, "reps": 4}).status_code == 400

    assert client.post(f"/sets/{set_id}/complete", headers=H).json()["completed_at"] is not None
    listed = client.get(f"/workout-exercises/{we_id}/sets", headers=H).json()
    assert [s["set_number"] for s in listed] == [1, 2]

    assert client.delete(f"/sets/{set_id}", headers=headers_for()).status_code == 404
    assert client.delete(f"/sets/{set_id}", headers=H).status_code == 204
