"""Profile directory events."""

from protean.fields import DateTime, Identifier, String

from dispatch.domain import dispatch


@dispatch.event(part_of="Profile")
class ProfileRegistered:
    """Someone joined the marketplace in a given role."""

    __version__ = 1

    profile_id = Identifier(required=True)
    role = String(required=True)
    full_name = String(required=True)
    registered_at = DateTime(required=True)
