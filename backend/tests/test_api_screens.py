"""
Tests for the screen routes (appointments, pets, users, records, notifications,
catalog and dashboard).
"""

import pytest


@pytest.fixture
def clinic(fake):
    fake.seed(
        "users",
        {"id": 1, "email": "kim@example.com", "first_name": "Kim", "last_name": "Lee", "state": "enabled",
         "created_at": "2024-05-01T09:00:00"},
        {"id": 2, "email": "sam@example.com", "first_name": "Sam", "last_name": "Park", "state": "disabled"},
    )
    fake.seed(
        "pets",
        {"id": 7, "user_id": 1, "name": "Milo", "type": "Dog", "breed": "Poodle", "gender": "male",
         "is_neutered": True, "created_at": "2024-05-02T09:00:00"},
        {"id": 8, "user_id": 1, "name": "Nabi", "type": "Cat", "gender": "female", "is_neutered": False},
    )
    fake.seed(
        "appointments",
        {"id": 1, "user_id": 1, "date": "2024-06-01", "member_first_name": "Kim", "member_last_name": "Lee",
         "status": "booked", "number_of_pets": 2, "created_at": "2024-05-20T10:00:00"},
        {"id": 2, "user_id": 2, "date": "2024-06-10", "member_first_name": "Sam", "member_last_name": "Park",
         "status": "draft", "number_of_pets": 1, "created_at": "2024-05-25T10:00:00"},
    )
    fake.seed(
        "appointment_pet_links",
        {"id": 100, "appointment_id": 1, "pet_id": 7, "purpose_of_visit": "Vaccination"},
        {"id": 101, "appointment_id": 1, "pet_id": None, "name": "Coco", "type": "Dog"},
        {"id": 102, "appointment_id": 2, "pet_id": 8},
    )
    fake.seed(
        "vaccine_records",
        {"id": 50, "pet_id": 7, "vaccine_type": "Core", "vaccine_name": "Rabies", "vaccination_date": "2024-01-10"},
    )
    fake.seed("breeds", {"id": 1, "name": "Poodle", "type": "Dog"}, {"id": 2, "name": "Persian", "type": "Cat"})
    return fake


# -------------------------
# Appointments
# -------------------------
def test_appointments_joined_and_newest_first(client, clinic):
    r = client.get("/api/v1/appointments")

    assert r.status_code == 200
    body = r.json()
    assert [a["id"] for a in body["data"]] == [2, 1]
    assert body["pagination"]["total"] == 2
    first = body["data"][1]
    assert first["member_name"] == "Kim Lee"
    assert [p["name"] for p in first["pets"]] == ["Milo", "Coco"]
    assert [p["registered"] for p in first["pets"]] == [True, False]


def test_appointment_filters(client, clinic):
    r = client.get("/api/v1/appointments", params={"search": "kim", "status": "booked"})
    assert [a["id"] for a in r.json()["data"]] == [1]

    r = client.get("/api/v1/appointments", params={"start_date": "2024-06-02", "end_date": "2024-06-10"})
    assert [a["id"] for a in r.json()["data"]] == [2]


def test_appointment_pets_and_missing_appointment(client, clinic):
    r = client.get("/api/v1/appointments/1/pets")
    assert [p["id"] for p in r.json()] == [7, 101]

    r = client.get("/api/v1/appointments/999/pets")
    assert r.status_code == 404


def test_medical_drafts_skip_walk_ins(client, clinic):
    r = client.get("/api/v1/appointments/1/medical-drafts")
    assert [d["pet_id"] for d in r.json()] == [7]


def test_create_medical_records_from_appointment(client, clinic):
    payload = {
        "forms": [
            {"pet_id": 7, "title": "Check-up for Milo", "date": "2024-06-01", "hospital_details": "Healthy",
             "photos": ["data:image/png;base64,AAA"]},
            {"pet_id": 8, "title": "Check-up for Nabi", "date": "2024-06-01"},
        ]
    }

    r = client.post("/api/v1/appointments/1/medical-records", json=payload)

    assert r.status_code == 200
    assert len(r.json()["created"]) == 1
    record = clinic.tables["medical_records"][0]
    assert record["pet_id"] == 7
    photo = clinic.tables["medical_record_photos"][0]
    assert photo["medical_record_id"] == record["id"]
    assert photo["uploaded_by"] == "hospital"


def test_update_appointment_status(client, clinic):
    r = client.patch("/api/v1/appointments/2/status", json={"status": "booked"})
    assert r.status_code == 200
    assert clinic.tables["appointments"][1]["status"] == "booked"

    assert client.patch("/api/v1/appointments/2/status", json={"status": "cancelled"}).status_code == 422


def test_bulk_delete_requires_ids(client, clinic):
    assert client.request("DELETE", "/api/v1/appointments", json={"ids": []}).status_code == 422

    r = client.request("DELETE", "/api/v1/appointments", json={"ids": [1]})
    assert r.status_code == 200
    assert [a["id"] for a in clinic.tables["appointments"]] == [2]


def test_any_failed_fetch_fails_the_screen(client, clinic):
    clinic.fail("GET", "appointment_pet_links")
    r = client.get("/api/v1/appointments")
    assert r.status_code == 502


# -------------------------
# Pets and users
# -------------------------
def test_pet_filters(client, clinic):
    r = client.get("/api/v1/pets", params={"search": "poo"})
    assert [p["name"] for p in r.json()["data"]] == ["Milo"]

    r = client.get("/api/v1/pets", params={"is_neutered": "no"})
    assert [p["name"] for p in r.json()["data"]] == ["Nabi"]


def test_breeds_for_species(client, clinic):
    r = client.get("/api/v1/pets/breeds", params={"species": "Cat"})
    assert [b["name"] for b in r.json()] == ["Persian"]


def test_update_pet(client, clinic):
    r = client.put("/api/v1/pets/7", json={"name": "Max"})
    assert r.status_code == 200
    assert clinic.tables["pets"][0]["name"] == "Max"
    assert clinic.tables["pets"][0]["breed"] == "Poodle"


def test_users_with_pet_counts(client, clinic):
    r = client.get("/api/v1/users")
    counts = {u["id"]: u["pets_count"] for u in r.json()["data"]}
    assert counts == {1: 2, 2: 0}

    r = client.get("/api/v1/users", params={"state": "disabled"})
    assert [u["email"] for u in r.json()["data"]] == ["sam@example.com"]


def test_user_pets(client, clinic):
    r = client.get("/api/v1/users/1/pets")
    assert [p["id"] for p in r.json()] == [7, 8]


# -------------------------
# Medical and vaccine records
# -------------------------
def test_update_medical_record_adds_hospital_photos(client, clinic):
    clinic.seed("medical_records", {"id": 60, "pet_id": 7, "title": "Check-up", "date": "2024-06-01"})

    r = client.put("/api/v1/medical-records/60", json={"hospital_details": "Follow up", "new_photos": ["data:x"]})

    assert r.status_code == 200
    assert clinic.tables["medical_records"][0]["hospital_details"] == "Follow up"
    assert clinic.tables["medical_record_photos"][0]["uploaded_by"] == "hospital"

    listed = client.get("/api/v1/medical-records").json()["data"]
    assert listed[0]["pet_name"] == "Milo"
    assert len(listed[0]["photos"]) == 1


def test_photo_only_update_keeps_hospital_details(client, clinic):
    clinic.seed(
        "medical_records",
        {"id": 61, "pet_id": 7, "title": "Check-up", "date": "2024-06-01", "hospital_details": "Keep me"},
    )

    r = client.put("/api/v1/medical-records/61", json={"new_photos": ["data:x"]})

    assert r.status_code == 200
    assert clinic.tables["medical_records"][0]["hospital_details"] == "Keep me"
    assert ("PUT", "medical_records") not in clinic.requests
    assert clinic.tables["medical_record_photos"][0]["medical_record_id"] == 61


def test_add_vaccine_history_with_photos(client, clinic):
    payload = {
        "pet_id": 7,
        "date_administered": "2024-06-01",
        "treatment_info": "Booster",
        "photos": [{"type": "Bill", "image_data": "data:bill"}],
    }

    r = client.post("/api/v1/vaccine-records/50/history", json=payload)

    assert r.status_code == 200
    listed = client.get("/api/v1/vaccine-records").json()["data"]
    history = listed[0]["history"]
    assert [h["treatment_info"] for h in history] == ["Booster"]
    assert [p["type"] for p in history[0]["photos"]] == ["Bill"]


def test_vaccine_history_requires_treatment_info(client, clinic):
    payload = {"pet_id": 7, "date_administered": "2024-06-01", "treatment_info": ""}
    assert client.post("/api/v1/vaccine-records/50/history", json=payload).status_code == 422


# -------------------------
# Notifications
# -------------------------
def test_events_and_notifications(client, clinic):
    clinic.seed(
        "upcoming_events",
        {"id": 5, "user_id": 1, "pet_id": 7, "title": "Booster due", "event_date": "2024-07-01"},
        {"id": 6, "user_id": 42, "title": "Check-up", "event_date": "2024-07-02"},
    )

    r = client.get("/api/v1/notifications/events", params={"search": "milo"})
    assert [e["id"] for e in r.json()["data"]] == [5]

    r = client.get("/api/v1/notifications/events")
    assert r.json()["data"][1]["user_name"] == "Unknown User"

    assert client.post("/api/v1/notifications/events/5/send").status_code == 200
    assert client.post("/api/v1/notifications/bulk", json={"title": "Closed", "message": "Monday"}).status_code == 200
    assert len(clinic.notifications) == 2


def test_failed_notification_returns_502(client, clinic):
    clinic.fail("POST", "fcm")
    r = client.post("/api/v1/notifications/bulk", json={"title": "Closed", "message": "Monday"})
    assert r.status_code == 502


# -------------------------
# Catalog
# -------------------------
def test_catalog_crud(client, fake):
    r = client.post("/api/v1/catalog/vaccine-types", json={"name": "Core"})
    assert r.status_code == 200
    type_id = r.json()["id"]

    client.put(f"/api/v1/catalog/vaccine-types/{type_id}", json={"name": "Core", "description": "Required"})
    assert client.get("/api/v1/catalog/vaccine-types").json()[0]["description"] == "Required"

    client.post("/api/v1/catalog/breeds", json={"name": "Siamese", "type": "Cat"})
    client.post("/api/v1/catalog/vaccine-names", json={"name": "Rabies"})
    assert [b["name"] for b in client.get("/api/v1/catalog/breeds").json()] == ["Siamese"]

    client.request("DELETE", "/api/v1/catalog/vaccine-types", json={"ids": [type_id]})
    assert client.get("/api/v1/catalog/vaccine-types").json() == []


# -------------------------
# Dashboard
# -------------------------
def test_dashboard_stats(client, clinic):
    r = client.get("/api/v1/dashboard/stats")

    assert r.status_code == 200
    body = r.json()
    assert body["stats"]["pets"] == 2
    assert body["stats"]["appointments"] == 2
    assert {"name": "Cats", "value": 1} in body["pet_types"]
    assert body["appointment_status"] == [
        {"status": "Completed", "count": 1},
        {"status": "Pending", "count": 1},
    ]
    assert body["top_vaccines"] == [{"vaccine": "Rabies", "count": 1}]
    assert body["recent_activity"][0]["id"] == "appt-2"


def test_sidebar_counts(client, clinic):
    r = client.get("/api/v1/dashboard/sidebar-counts")
    assert r.json() == {
        "pets": 2,
        "appointments": 2,
        "medical_records": 0,
        "vaccines": 1,
        "users": 2,
        "events": 0,
    }
