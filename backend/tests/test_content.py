"""
MedDent - Site content tests
Tests: ordered collections (shared CRUD shape), section backgrounds,
final CTA singleton, appointments.
Run: cd backend && pytest tests/test_content.py -v
"""

import pytest


DOCTOR = {"name": "Dr. Karimov", "specialty": "Implantology", "years_experience": 12}


class TestOrderedCollections:
    def test_public_list_sorted_by_display_order(self, client, admin_headers):
        for order, name in [(2, "Second"), (0, "First"), (5, "Third")]:
            client.post("/api/doctors", json={**DOCTOR, "name": name, "display_order": order}, headers=admin_headers)

        r = client.get("/api/doctors")
        assert r.status_code == 200
        assert [d["name"] for d in r.json()["data"]] == ["First", "Second", "Third"]

    def test_active_only(self, client, admin_headers):
        client.post("/api/faqs", json={"question": "Visible?", "answer": "Yes"}, headers=admin_headers)
        client.post("/api/faqs", json={"question": "Hidden?", "answer": "Yes", "is_active": False},
                    headers=admin_headers)

        assert len(client.get("/api/faqs").json()["data"]) == 2
        active = client.get("/api/faqs?active_only=true").json()["data"]
        assert [f["question"] for f in active] == ["Visible?"]

    def test_reviews_use_is_approved(self, client, admin_headers):
        base = {"patient_name": "Aziz", "rating": 5, "review_text": "Great"}
        client.post("/api/reviews", json={**base, "is_approved": True, "is_result": True}, headers=admin_headers)
        client.post("/api/reviews", json={**base, "is_approved": False}, headers=admin_headers)
        client.post("/api/reviews", json={**base, "is_approved": True, "is_result": False}, headers=admin_headers)

        assert len(client.get("/api/reviews?active_only=true").json()["data"]) == 2
        results = client.get("/api/reviews?active_only=true&is_result=true").json()["data"]
        assert len(results) == 1
        assert results[0]["is_result"] is True

    def test_review_rating_bounds(self, client, admin_headers):
        r = client.post("/api/reviews", json={"patient_name": "A", "rating": 6, "review_text": "x"},
                        headers=admin_headers)
        assert r.status_code == 422

    def test_get_update_order_delete(self, client, admin_headers):
        item = client.post("/api/services", json={"title": "Whitening", "description": "Laser", "price_from": 500000},
                           headers=admin_headers).json()["data"]

        assert client.get(f"/api/services/{item['id']}").json()["data"]["title"] == "Whitening"

        r = client.put(f"/api/services/{item['id']}", json={"price_from": 450000}, headers=admin_headers)
        assert r.json()["data"]["price_from"] == 450000
        assert r.json()["data"]["title"] == "Whitening"

        r = client.patch(f"/api/services/{item['id']}/order", json={"display_order": 7}, headers=admin_headers)
        assert r.status_code == 200
        assert client.get(f"/api/services/{item['id']}").json()["data"]["display_order"] == 7

        assert client.delete(f"/api/services/{item['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/services/{item['id']}").status_code == 404

    @pytest.mark.parametrize("path,body", [
        ("/api/doctors", DOCTOR),
        ("/api/pill-sections", {"icon": "tooth", "title": "Painless", "description": "Modern anesthesia"}),
        ("/api/value-items", {"feature_name": "3D scan", "estimated_value": 300000}),
    ])
    def test_mutations_require_admin(self, client, path, body):
        assert client.post(path, json=body).status_code == 401

    def test_missing_required_field(self, client, admin_headers):
        r = client.post("/api/value-items", json={"feature_name": "No value"}, headers=admin_headers)
        assert r.status_code == 422

    def test_unknown_item(self, client, admin_headers):
        assert client.get("/api/pill-sections/nope").status_code == 404
        r = client.put("/api/pill-sections/nope", json={"title": "x"}, headers=admin_headers)
        assert r.status_code == 404
        r = client.patch("/api/pill-sections/nope/order", json={"display_order": 1}, headers=admin_headers)
        assert r.status_code == 404


class TestSectionBackgrounds:
    def test_unknown_section_is_null(self, client):
        r = client.get("/api/section-backgrounds/hero")
        assert r.status_code == 200
        assert r.json()["data"] is None

    def test_upsert(self, client, admin_headers):
        r = client.put("/api/section-backgrounds/hero", json={"image_url": "/uploads/bg/a.jpg", "opacity": "0.4"},
                       headers=admin_headers)
        assert r.status_code == 200
        client.put("/api/section-backgrounds/hero", json={"opacity": "0.6"}, headers=admin_headers)

        data = client.get("/api/section-backgrounds/hero").json()["data"]
        assert data["image_url"] == "/uploads/bg/a.jpg"
        assert data["opacity"] == "0.6"
        assert len(client.get("/api/section-backgrounds").json()["data"]) == 1

    def test_delete(self, client, admin_headers):
        client.put("/api/section-backgrounds/faq", json={"image_url": "x"}, headers=admin_headers)
        assert client.delete("/api/section-backgrounds/faq", headers=admin_headers).status_code == 200
        assert client.delete("/api/section-backgrounds/faq", headers=admin_headers).status_code == 404


class TestFinalCta:
    def test_default_created_once(self, client, db):
        first = client.get("/api/final-cta").json()["data"]
        second = client.get("/api/final-cta").json()["data"]
        assert first["id"] == second["id"]
        assert first["button_text"] == "Book Now"

    def test_update(self, client, admin_headers):
        r = client.put("/api/final-cta", json={"button_text": "Yozilish", "heading_alignment": "left"},
                       headers=admin_headers)
        assert r.status_code == 200
        data = client.get("/api/final-cta").json()["data"]
        assert data["button_text"] == "Yozilish"
        assert data["heading_alignment"] == "left"
        assert data["description"] == "Book your consultation today"

    def test_update_requires_admin(self, client):
        assert client.put("/api/final-cta", json={"button_text": "x"}).status_code == 401


class TestAppointments:
    def test_public_booking_pending(self, client, admin_headers):
        r = client.post("/api/appointments", json={
            "patient_name": "Aziz", "phone": "+998901234567", "booking_type": "quick", "status": "confirmed"
        })
        assert r.status_code == 201
        data = r.json()["data"]
        assert data["status"] == "pending"
        assert data["booking_type"] == "quick"

    def test_blank_phone(self, client):
        r = client.post("/api/appointments", json={"patient_name": "Aziz", "phone": " "})
        assert r.status_code == 400

    def test_bad_booking_type(self, client):
        r = client.post("/api/appointments", json={"patient_name": "Aziz", "phone": "1", "booking_type": "walk-in"})
        assert r.status_code == 422

    def test_admin_workflow(self, client, admin_headers):
        appointment_id = client.post("/api/appointments", json={
            "patient_name": "Aziz", "phone": "+998901234567", "preferred_date": "2024-04-01"
        }).json()["data"]["id"]
        client.post("/api/appointments", json={"patient_name": "Dilnoza", "phone": "+998907654321"})

        r = client.put(f"/api/appointments/{appointment_id}", json={"status": "confirmed"}, headers=admin_headers)
        assert r.json()["data"]["status"] == "confirmed"

        confirmed = client.get("/api/appointments?status=confirmed", headers=admin_headers).json()["data"]
        assert [a["id"] for a in confirmed] == [appointment_id]
        assert len(client.get("/api/appointments", headers=admin_headers).json()["data"]) == 2

        assert client.delete(f"/api/appointments/{appointment_id}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/appointments/{appointment_id}", headers=admin_headers).status_code == 404

    def test_list_requires_admin(self, client):
        assert client.get("/api/appointments").status_code == 401
