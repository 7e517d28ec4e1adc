from strayspot.core.collaborators import Actor
from strayspot.models.enums import ActorRole

from conftest import application_payload, auth_headers, questionnaire


def _register_verified_org(client, admin, email="hello@pawshaven.example.com"):
    resp = client.post(
        "/orgs",
        json={"org_name": "Paws Haven", "email": email, "verification_document": "docs/permit.pdf"},
    )
    assert resp.status_code == 201
    org_id = resp.json()["org_id"]
    resp = client.patch(
        f"/orgs/{org_id}/verification",
        json={"status": "VERIFIED"},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 200
    assert resp.json()["verification_status"] == "VERIFIED"
    return Actor(id=org_id, role=ActorRole.ORG)


def _register_adopter(client, email="maria@example.com"):
    resp = client.post("/adopters", json={"email": email, "first_name": "Maria", "last_name": "Santos"})
    assert resp.status_code == 201
    return Actor(id=resp.json()["adopter_id"], role=ActorRole.ADOPTER)


def _create_pet(client, org):
    resp = client.post("/pets", json={"name": "Biscuit", "species": "dog"}, headers=auth_headers(org))
    assert resp.status_code == 201
    return resp.json()["pet_id"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_invalid_token(client):
    resp = client.get("/admin/stats", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token"


def test_stats_require_admin(client, admin):
    adopter = Actor(id=5, role=ActorRole.ADOPTER)
    assert client.get("/admin/stats", headers=auth_headers(adopter)).status_code == 403

    resp = client.get("/admin/stats", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.headers["cache-control"] == "no-cache, no-store, must-revalidate"
    assert resp.json()["total_users"] == 0


def test_unverified_org_cannot_list_pets(client):
    resp = client.post(
        "/orgs",
        json={"org_name": "New Shelter", "email": "new@shelter.example.com", "verification_document": "docs/a.pdf"},
    )
    org = Actor(id=resp.json()["org_id"], role=ActorRole.ORG)

    resp = client.post("/pets", json={"name": "Biscuit", "species": "dog"}, headers=auth_headers(org))
    assert resp.status_code == 403
    assert resp.json()["code"] == "not_authorized"


def test_adoption_flow(client, admin):
    org = _register_verified_org(client, admin)
    pet_id = _create_pet(client, org)
    adopter = _register_adopter(client)

    resp = client.post("/adoption-applications", json=application_payload(pet_id), headers=auth_headers(adopter))
    assert resp.status_code == 201
    app = resp.json()
    assert app["status"] == "PENDING"
    assert app["org_id"] == org.id

    resp = client.post("/adoption-applications", json=application_payload(pet_id), headers=auth_headers(adopter))
    assert resp.status_code == 409
    assert resp.json()["code"] == "duplicate_active_application"
    assert resp.json()["application_id"] == app["application_id"]

    resp = client.patch(
        f"/adoption-applications/{app['application_id']}/status",
        json={"status": "REJECTED"},
        headers=auth_headers(org),
    )
    assert resp.status_code == 422
    assert resp.json()["code"] == "missing_reason"

    resp = client.patch(
        f"/adoption-applications/{app['application_id']}/status",
        json={"status": "REJECTED", "notes": "incomplete housing info"},
        headers=auth_headers(org),
    )
    assert resp.status_code == 200
    assert resp.json()["rejection_reason"] == "incomplete housing info"

    resp = client.get(f"/adoption-applications/{app['application_id']}/history", headers=auth_headers(adopter))
    assert resp.status_code == 200
    assert [(e["previous_status"], e["new_status"]) for e in resp.json()] == [
        (None, "PENDING"),
        ("PENDING", "REJECTED"),
    ]

    resp = client.get("/adoption-applications/mine", headers=auth_headers(adopter))
    assert [a["application_id"] for a in resp.json()] == [app["application_id"]]


def test_terms_and_withdrawal_over_http(client, admin):
    org = _register_verified_org(client, admin)
    pet_id = _create_pet(client, org)
    adopter = _register_adopter(client)

    resp = client.post(
        "/adoption-applications",
        json=application_payload(pet_id, terms_accepted=False),
        headers=auth_headers(adopter),
    )
    assert resp.status_code == 422
    assert resp.json()["code"] == "terms_not_accepted"

    app = client.post(
        "/adoption-applications", json=application_payload(pet_id), headers=auth_headers(adopter)
    ).json()
    resp = client.post(f"/adoption-applications/{app['application_id']}/withdraw", headers=auth_headers(adopter))
    assert resp.status_code == 200
    assert resp.json()["status"] == "WITHDRAWN"

    resp = client.post(f"/adoption-applications/{app['application_id']}/withdraw", headers=auth_headers(adopter))
    assert resp.status_code == 409
    assert resp.json()["code"] == "illegal_transition"


def test_suspended_adopter_over_http(client, admin):
    org = _register_verified_org(client, admin)
    pet_id = _create_pet(client, org)
    adopter = _register_adopter(client)

    resp = client.post(
        f"/adopters/{adopter.id}/suspend", json={"notes": "fraud report"}, headers=auth_headers(admin)
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "SUSPENDED"

    resp = client.post("/adoption-applications", json=application_payload(pet_id), headers=auth_headers(adopter))
    assert resp.status_code == 403
    assert resp.json()["code"] == "adopter_suspended"

    stats = client.get("/admin/stats", headers=auth_headers(admin)).json()
    assert stats["adopters_suspended"] == 1


def test_followup_resubmission_over_http(client, admin):
    resp = client.post(
        "/orgs",
        json={"org_name": "Northside", "email": "contact@northside.example.com", "verification_document": "a.pdf"},
    )
    org = Actor(id=resp.json()["org_id"], role=ActorRole.ORG)

    resp = client.patch(
        f"/orgs/{org.id}/verification",
        json={"status": "FOLLOWUP", "notes": "Permit is expired"},
        headers=auth_headers(admin),
    )
    assert resp.json()["verification_notes"] == "Permit is expired"

    resp = client.post(
        "/orgs/me/verification/resubmit",
        json={"verification_document": "b.pdf", "additional_info": "Renewed permit"},
        headers=auth_headers(org),
    )
    assert resp.status_code == 200
    assert resp.json()["verification_status"] == "PENDING"
    assert resp.json()["verification_notes"] == ""

    history = client.get(f"/orgs/{org.id}/history", headers=auth_headers(admin)).json()
    assert history[-1]["resubmission"] is True


def test_delete_adopter_requires_reason_over_http(client, admin):
    adopter = _register_adopter(client)
    resp = client.request(
        "DELETE", f"/adopters/{adopter.id}", json={"reason": ""}, headers=auth_headers(admin)
    )
    assert resp.status_code == 422
    assert resp.json()["code"] == "missing_reason"

    resp = client.request(
        "DELETE", f"/adopters/{adopter.id}", json={"reason": "Requested by user"}, headers=auth_headers(admin)
    )
    assert resp.json() == {"status": "ok"}
    assert client.get(f"/adopters/{adopter.id}", headers=auth_headers(admin)).status_code == 404


def test_answers_are_not_editable_by_adopter_over_http(client, admin):
    org = _register_verified_org(client, admin)
    pet_id = _create_pet(client, org)
    adopter = _register_adopter(client)
    app = client.post(
        "/adoption-applications", json=application_payload(pet_id), headers=auth_headers(adopter)
    ).json()

    answers = questionnaire(pet_location="Garage")
    resp = client.put(f"/adoption-applications/{app['application_id']}/answers", json=answers, headers=auth_headers(adopter))
    assert resp.status_code == 403
    assert resp.json()["code"] == "not_authorized"

    resp = client.put(f"/adoption-applications/{app['application_id']}/answers", json=answers, headers=auth_headers(org))
    assert resp.status_code == 200
    assert resp.json()["pet_location"] == "Garage"
