from pydantic import BaseModel


class StatsRead(BaseModel):
    total_users: int
    adopters: int
    organizations: int
    adopters_active: int
    adopters_suspended: int
    pending_organizations: int
    verified_organizations: int
    rejected_organizations: int
    followup_organizations: int
    applications_by_status: dict[str, int]
