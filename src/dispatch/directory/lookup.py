"""Read helpers over the profile directory."""

from protean.utils.globals import current_domain

from dispatch.directory.profile import Profile, Role
from dispatch.utils.query import fetch_all


def get_profile(profile_id: str) -> Profile:
    """Fetch a profile by id. Raises ObjectNotFoundError when absent."""
    return current_domain.repository_for(Profile).get(profile_id)


def vehicle_owners() -> list[Profile]:
    """Point-in-time snapshot of every registered vehicle owner."""
    repo = current_domain.repository_for(Profile)
    return fetch_all(repo._dao.query.filter(role=Role.VEHICLE_OWNER.value))
