from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ascending.schemas.user import UserRead, UserUpdate


class ProfileFields(BaseModel):
    """The 27 free-form intake fields. Wire names are camelCase (``emergencyName``)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    # Personal
    age: str | None = None
    height: str | None = None
    weight: str | None = None
    gender: str | None = None

    # Emergency contact
    emergency_name: str | None = None
    emergency_phone: str | None = None
    emergency_relationship: str | None = None

    # Medical history
    medical_conditions: str | None = None
    medications: str | None = None
    injuries_surgeries: str | None = None
    allergies: str | None = None

    # Fitness
    fitness_level: str | None = None
    worked_out_before: str | None = None
    exercise_types: str | None = None
    equipment_access: str | None = None
    primary_goal: str | None = None
    secondary_goals: str | None = None
    target_timeline: str | None = None
    sessions_per_week: str | None = None
    favorite_exercises: str | None = None
    exercises_to_avoid: str | None = None

    # Schedule & lifestyle
    preferred_schedule: str | None = None
    dietary_restrictions: str | None = None
    activity_level: str | None = None
    sleep_average: str | None = None
    days_per_week: str | None = None
    sessions_per_month: str | None = None


class ProfileUpdate(ProfileFields):
    # Unknown keys are dropped, never forwarded to the store
    model_config = ConfigDict(extra="ignore")


class ProfileRead(ProfileFields):
    model_config = ConfigDict(from_attributes=True)


class ProfileUpdateRequest(BaseModel):
    user: UserUpdate | None = None
    profile: ProfileUpdate | None = None


class ProfileResponse(BaseModel):
    user: UserRead
    profile: dict[str, str]
