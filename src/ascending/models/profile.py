from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ascending.database import Base

# Every column a client may write through a profile patch. Order follows the
# intake form: personal, emergency contact, medical, fitness, schedule.
PROFILE_FIELDS: tuple[str, ...] = (
    "age",
    "height",
    "weight",
    "gender",
    "emergency_name",
    "emergency_phone",
    "emergency_relationship",
    "medical_conditions",
    "medications",
    "injuries_surgeries",
    "allergies",
    "fitness_level",
    "worked_out_before",
    "exercise_types",
    "equipment_access",
    "primary_goal",
    "secondary_goals",
    "target_timeline",
    "sessions_per_week",
    "favorite_exercises",
    "exercises_to_avoid",
    "preferred_schedule",
    "dietary_restrictions",
    "activity_level",
    "sleep_average",
    "days_per_week",
    "sessions_per_month",
)


class Profile(Base):
    __tablename__ = "profiles"
    # Column names are the lowercased camelCase names of the existing PostgreSQL
    # schema, which was created with unquoted identifiers.

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    # Personal
    age: Mapped[str | None] = mapped_column(String(10), default=None)
    height: Mapped[str | None] = mapped_column(String(20), default=None)
    weight: Mapped[str | None] = mapped_column(String(20), default=None)
    gender: Mapped[str | None] = mapped_column(String(50), default=None)

    # Emergency contact
    emergency_name: Mapped[str | None] = mapped_column("emergencyname", String(255), default=None)
    emergency_phone: Mapped[str | None] = mapped_column("emergencyphone", String(20), default=None)
    emergency_relationship: Mapped[str | None] = mapped_column(
        "emergencyrelationship", String(100), default=None
    )

    # Medical history
    medical_conditions: Mapped[str | None] = mapped_column("medicalconditions", Text, default=None)
    medications: Mapped[str | None] = mapped_column(Text, default=None)
    injuries_surgeries: Mapped[str | None] = mapped_column("injuriessurgeries", Text, default=None)
    allergies: Mapped[str | None] = mapped_column(Text, default=None)

    # Fitness
    fitness_level: Mapped[str | None] = mapped_column("fitnesslevel", String(100), default=None)
    worked_out_before: Mapped[str | None] = mapped_column("workedoutbefore", Text, default=None)
    exercise_types: Mapped[str | None] = mapped_column("exercisetypes", Text, default=None)
    equipment_access: Mapped[str | None] = mapped_column("equipmentaccess", Text, default=None)
    primary_goal: Mapped[str | None] = mapped_column("primarygoal", Text, default=None)
    secondary_goals: Mapped[str | None] = mapped_column("secondarygoals", Text, default=None)
    target_timeline: Mapped[str | None] = mapped_column("targettimeline", String(100), default=None)
    sessions_per_week: Mapped[str | None] = mapped_column(
        "sessionsperweek", String(50), default=None
    )
    favorite_exercises: Mapped[str | None] = mapped_column("favoriteexercises", Text, default=None)
    exercises_to_avoid: Mapped[str | None] = mapped_column("exercisestoavoid", Text, default=None)

    # Schedule & lifestyle
    preferred_schedule: Mapped[str | None] = mapped_column("preferredschedule", Text, default=None)
    dietary_restrictions: Mapped[str | None] = mapped_column(
        "dietaryrestrictions", Text, default=None
    )
    activity_level: Mapped[str | None] = mapped_column("activitylevel", String(100), default=None)
    sleep_average: Mapped[str | None] = mapped_column("sleepaverage", String(20), default=None)
    days_per_week: Mapped[str | None] = mapped_column("daysperweek", String(50), default=None)
    sessions_per_month: Mapped[str | None] = mapped_column(
        "sessionspermonth", String(50), default=None
    )
