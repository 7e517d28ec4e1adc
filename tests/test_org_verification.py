import pytest

from strayspot.controllers import org_verification_controller as orgs
from strayspot.controllers import adoption_application_controller as apps
from strayspot.controllers import audit_controller
from strayspot.core import errors
from strayspot.core.collaborators import EventType
from strayspot.models.enums import EntityType, VerificationStatus
from strayspot.repositories import pet_repo
from strayspot.schemas.org_schema import OrgCreate


def _statuses(db, org_id):
    return [(e.previous_status, e.new_status) for e in orgs.organization_history(db, org_id)]


def test_registered_organization_starts_pending(db_session, make_org):
    org = make_org(status=VerificationStatus.PENDING)

    row = orgs.get_organization(db_session, org.id)
    assert row.verification_status == VerificationStatus.PENDING
    assert _statuses(db_session, org.id) == [(None, "PENDING")]
    assert not orgs.can_act_as_verified_organization(db_session, org.id)


def test_duplicate_email_is_rejected(db_session, make_org):
    make_org()
    with pytest.raises(errors.ValidationError):
        orgs.register_organization(
            db_session,
            OrgCreate(org_name="Copy", email="SHELTER1@example.com", verification_document="docs/x.pdf"),
        )


def test_similar_emails_are_distinct_organizations(db_session):
    first = orgs.register_organization(
        db_session, OrgCreate(org_name="Axb", email="axb@example.com", verification_document="docs/a.pdf")
    )
    second = orgs.register_organization(
        db_session, OrgCreate(org_name="A_b", email="a_b@example.com", verification_document="docs/b.pdf")
    )
    assert first.org_id != second.org_id


def test_admin_verifies_pending_organization(db_session, make_org, admin, dispatcher):
    org = make_org(status=VerificationStatus.PENDING)

    row = orgs.decide(db_session, org.id, admin, VerificationStatus.VERIFIED, dispatcher=dispatcher)

    assert row.verification_status == VerificationStatus.VERIFIED
    assert orgs.can_act_as_verified_organization(db_session, org.id)
    entry = orgs.organization_history(db_session, org.id)[-1]
    assert (entry.previous_status, entry.new_status, entry.action) == ("PENDING", "VERIFIED", "decide")
    assert entry.actor_id == admin.id
    assert dispatcher.events[-1].type == EventType.ORGANIZATION_STATUS_CHANGED


@pytest.mark.parametrize("status", [VerificationStatus.FOLLOWUP, VerificationStatus.REJECTED])
def test_followup_and_rejection_need_notes(db_session, make_org, admin, status):
    org = make_org(status=VerificationStatus.PENDING)

    with pytest.raises(errors.MissingReason):
        orgs.decide(db_session, org.id, admin, status, "   ")
    assert orgs.get_organization(db_session, org.id).verification_status == VerificationStatus.PENDING


def test_only_admin_decides(db_session, make_org, make_adopter):
    org = make_org(status=VerificationStatus.PENDING)

    with pytest.raises(errors.NotAuthorized):
        orgs.decide(db_session, org.id, org, VerificationStatus.VERIFIED)
    with pytest.raises(errors.NotAuthorized):
        orgs.decide(db_session, org.id, make_adopter(), VerificationStatus.VERIFIED)


def test_decision_must_be_a_decision(db_session, make_org, admin):
    org = make_org(status=VerificationStatus.PENDING)
    with pytest.raises(errors.IllegalTransition):
        orgs.decide(db_session, org.id, admin, VerificationStatus.PENDING)


@pytest.mark.parametrize("status", [VerificationStatus.VERIFIED, VerificationStatus.REJECTED])
def test_decided_organizations_are_final(db_session, make_org, admin, status):
    org = make_org(status=status)

    with pytest.raises(errors.IllegalTransition):
        orgs.decide(db_session, org.id, admin, VerificationStatus.FOLLOWUP, "one more document")
    with pytest.raises(errors.IllegalTransition):
        orgs.resubmit(db_session, org.id, org, "docs/new.pdf")


def test_followup_cannot_be_decided_again_before_resubmission(db_session, make_org, admin):
    org = make_org(status=VerificationStatus.FOLLOWUP)
    with pytest.raises(errors.IllegalTransition):
        orgs.decide(db_session, org.id, admin, VerificationStatus.VERIFIED)


def test_resubmission_returns_followup_to_pending(db_session, make_org, dispatcher):
    org = make_org(status=VerificationStatus.FOLLOWUP, notes="Permit is expired")

    row = orgs.resubmit(
        db_session, org.id, org, "docs/permit-2026.pdf", "Uploaded the renewed permit", dispatcher=dispatcher
    )

    assert row.verification_status == VerificationStatus.PENDING
    assert row.verification_document == "docs/permit-2026.pdf"
    assert row.verification_notes == ""
    assert row.resubmission_notes == "Uploaded the renewed permit"
    history = orgs.organization_history(db_session, org.id)
    assert [e.resubmission for e in history] == [False, False, True]
    assert (history[-1].previous_status, history[-1].new_status) == ("FOLLOWUP", "PENDING")
    assert history[-1].notes == "Uploaded the renewed permit"
    # The admin's instructions stay in the history after the visible notes are cleared.
    assert history[1].notes == "Permit is expired"
    assert dispatcher.events[-1].new_status == "PENDING"


def test_resubmission_without_info_uses_default_note(db_session, make_org):
    org = make_org(status=VerificationStatus.FOLLOWUP)
    orgs.resubmit(db_session, org.id, org, "docs/again.pdf")
    assert orgs.organization_history(db_session, org.id)[-1].notes == orgs.DEFAULT_RESUBMISSION_NOTE


def test_resubmission_checks(db_session, make_org, admin):
    org = make_org(status=VerificationStatus.FOLLOWUP)
    other = make_org(status=VerificationStatus.FOLLOWUP)

    with pytest.raises(errors.ValidationError):
        orgs.resubmit(db_session, org.id, org, "  ")
    with pytest.raises(errors.NotAuthorized):
        orgs.resubmit(db_session, org.id, other, "docs/x.pdf")
    with pytest.raises(errors.NotAuthorized):
        orgs.resubmit(db_session, org.id, admin, "docs/x.pdf")


def test_pending_cannot_resubmit(db_session, make_org):
    org = make_org(status=VerificationStatus.PENDING)
    with pytest.raises(errors.IllegalTransition):
        orgs.resubmit(db_session, org.id, org, "docs/x.pdf")


def test_full_followup_cycle_then_verified(db_session, make_org, admin):
    org = make_org(status=VerificationStatus.FOLLOWUP)
    orgs.resubmit(db_session, org.id, org, "docs/x.pdf")
    orgs.decide(db_session, org.id, admin, VerificationStatus.VERIFIED)

    assert _statuses(db_session, org.id) == [
        (None, "PENDING"),
        ("PENDING", "FOLLOWUP"),
        ("FOLLOWUP", "PENDING"),
        ("PENDING", "VERIFIED"),
    ]


def test_require_verified_organization(db_session, make_org, make_adopter):
    verified = make_org()
    pending = make_org(status=VerificationStatus.PENDING)

    orgs.require_verified_organization(db_session, verified)
    with pytest.raises(errors.NotAuthorized):
        orgs.require_verified_organization(db_session, pending)
    with pytest.raises(errors.NotAuthorized):
        orgs.require_verified_organization(db_session, make_adopter())
    assert not orgs.can_act_as_verified_organization(db_session, 4242)


def test_unknown_organization(db_session, admin):
    with pytest.raises(errors.NotFound):
        orgs.decide(db_session, 4242, admin, VerificationStatus.VERIFIED)


def test_delete_organization_removes_pets_and_applications_but_keeps_history(
    db_session, make_org, make_pet, make_adopter, submit, admin, catalog
):
    org = make_org()
    pet_id = make_pet(org)
    app = submit(make_adopter(), pet_id)

    orgs.delete_organization(db_session, org.id, admin, "Closed down", catalog)

    with pytest.raises(errors.NotFound):
        orgs.get_organization(db_session, org.id)
    assert pet_repo.get_pet_by_id(db_session, pet_id) is None
    with pytest.raises(errors.NotFound):
        apps.get_application(db_session, app.application_id, admin)
    history = orgs.organization_history(db_session, org.id)
    assert history[-1].action == "delete"
    assert "Closed down" in history[-1].notes
    assert audit_controller.history(db_session, EntityType.ADOPTION_APPLICATION, app.application_id)


def test_delete_organization_requires_admin_and_reason(db_session, make_org, admin, catalog):
    org = make_org()
    with pytest.raises(errors.NotAuthorized):
        orgs.delete_organization(db_session, org.id, org, "Closing", catalog)
    with pytest.raises(errors.MissingReason):
        orgs.delete_organization(db_session, org.id, admin, "", catalog)
    assert orgs.get_organization(db_session, org.id).org_id == org.id


def test_list_organizations_by_status(db_session, make_org):
    make_org()
    make_org(status=VerificationStatus.PENDING)
    make_org(status=VerificationStatus.FOLLOWUP)

    assert len(orgs.list_organizations(db_session)) == 3
    pending = orgs.list_organizations(db_session, status=VerificationStatus.PENDING)
    assert [o.verification_status for o in pending] == [VerificationStatus.PENDING]
