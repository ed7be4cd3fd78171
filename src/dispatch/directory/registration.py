"""Profile registration — command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from dispatch.domain import dispatch
from dispatch.directory.profile import Profile


@dispatch.command(part_of="Profile")
class RegisterProfile:
    profile_id = Identifier()
    role = String(required=True, max_length=30)
    full_name = String(required=True, max_length=200)
    business_name = String(max_length=200)
    address = String(max_length=500)
    phone = String(max_length=50)
    email = String(max_length=254)
    vehicle_type = String(max_length=50)


@dispatch.command_handler(part_of=Profile)
class RegisterProfileHandler:
    @handle(RegisterProfile)
    def register_profile(self, command):
        profile = Profile.register(
            role=command.role,
            full_name=command.full_name,
            business_name=command.business_name,
            address=command.address,
            phone=command.phone,
            email=command.email,
            vehicle_type=command.vehicle_type,
            profile_id=command.profile_id,
        )
        current_domain.repository_for(Profile).add(profile)
        return str(profile.id)
