"""Tests for the allow-listed partial-update builder and profile rendering."""

from ascending.models.profile import Profile
from ascending.schemas.profile import ProfileUpdate
from ascending.services.profile import build_profile_changes, serialize_profile


class TestBuildProfileChanges:
    def test_keeps_only_present_non_null_fields(self) -> None:
        patch = ProfileUpdate.model_validate({"age": "30", "height": None, "gender": "M"})
        assert build_profile_changes(patch) == {"age": "30", "gender": "M"}

    def test_raw_mapping_drops_unknown_columns(self) -> None:
        changes = build_profile_changes(
            {"age": "30", "user_id": 9, "password": "x", "age = 1 --": "y"}
        )
        assert changes == {"age": "30"}

    def test_empty_patch(self) -> None:
        assert build_profile_changes(ProfileUpdate()) == {}
        assert build_profile_changes({"allergies": None}) == {}

    def test_empty_string_is_a_value(self) -> None:
        assert build_profile_changes({"medications": ""}) == {"medications": ""}


class TestSerializeProfile:
    def test_missing_row(self) -> None:
        assert serialize_profile(None) == {}

    def test_empty_row(self) -> None:
        assert serialize_profile(Profile(user_id=1)) == {}

    def test_camel_case_keys(self) -> None:
        profile = Profile(user_id=1, sessions_per_week="3", exercises_to_avoid="Burpees")
        assert serialize_profile(profile) == {
            "sessionsPerWeek": "3",
            "exercisesToAvoid": "Burpees",
        }
