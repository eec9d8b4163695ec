from ascending.models.profile import PROFILE_FIELDS, Profile
from ascending.models.user import User

__all__ = [
    "PROFILE_FIELDS",
    "Profile",
    "User",
]
