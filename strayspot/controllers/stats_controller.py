"""Aggregation & statistics for the admin dashboard.

Read-only. Every count comes from the current status columns, queried in the
caller's session, so a caller that just committed a change sees it on the
next call.
"""

from sqlalchemy.orm import Session
from strayspot.models.enums import AdopterStatus, ApplicationStatus, VerificationStatus
from strayspot.repositories import adopter_repo, adoption_application_repo, org_repo
from strayspot.schemas.stats_schema import StatsRead


def compute_stats(db: Session) -> StatsRead:
    adopters_by_status = adopter_repo.count_adopters_by_status(db)
    orgs_by_status = org_repo.count_orgs_by_status(db)
    apps_by_status = adoption_application_repo.count_applications_by_status(db)

    adopters = sum(adopters_by_status.values())
    organizations = sum(orgs_by_status.values())
    return StatsRead(
        total_users=adopters + organizations,
        adopters=adopters,
        organizations=organizations,
        adopters_active=adopters_by_status.get(AdopterStatus.ACTIVE, 0),
        adopters_suspended=adopters_by_status.get(AdopterStatus.SUSPENDED, 0),
        pending_organizations=orgs_by_status.get(VerificationStatus.PENDING, 0),
        verified_organizations=orgs_by_status.get(VerificationStatus.VERIFIED, 0),
        rejected_organizations=orgs_by_status.get(VerificationStatus.REJECTED, 0),
        followup_organizations=orgs_by_status.get(VerificationStatus.FOLLOWUP, 0),
        applications_by_status={
            status.value: apps_by_status.get(status, 0) for status in ApplicationStatus
        },
    )
