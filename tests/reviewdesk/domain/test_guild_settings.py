"""Tests for the GuildSettings aggregate — defaults and partial updates."""

import json

import pytest
from protean.exceptions import ValidationError
from reviewdesk.settings.settings import GuildSettings


def _make_settings(guild_id="guild-x"):
    return GuildSettings.create_default(guild_id)


class TestDefaults:
    def test_guild_id_is_identity(self):
        settings = _make_settings("guild-42")
        assert settings.guild_id == "guild-42"

    def test_channels_and_roles_unset(self):
        settings = _make_settings()
        assert settings.staff_review_channel is None
        assert settings.reviews_channel is None
        assert settings.logs_channel is None
        assert settings.staff_role is None

    def test_feature_flags(self):
        features = _make_settings().features
        assert features.allow_anonymous is False
        assert features.enable_cooldowns is True
        assert features.auto_approval is False
        assert features.allow_review_edits is False

    def test_cooldowns_in_milliseconds(self):
        cooldowns = _make_settings().cooldowns
        assert cooldowns.review_request == 86_400_000
        assert cooldowns.review_submission == 3_600_000

    def test_review_constraints(self):
        review = _make_settings().review
        assert (review.min_text_length, review.max_text_length) == (10, 2000)
        assert (review.min_rating, review.max_rating) == (1, 5)
        assert review.max_reviews_per_user is None

    def test_default_language(self):
        assert _make_settings().default_language == "en"

    def test_creation_raises_event(self):
        settings = _make_settings("guild-ev")
        assert settings._events[0].__class__.__name__ == "GuildSettingsCreated"


class TestApplyChanges:
    def test_merges_single_key_within_group(self):
        settings = _make_settings()
        settings.apply_changes({"features": {"allow_anonymous": True}}, updated_by="admin-1")

        assert settings.features.allow_anonymous is True
        assert settings.features.enable_cooldowns is True

    def test_untouched_groups_keep_values(self):
        settings = _make_settings()
        settings.apply_changes({"channels": {"reviews_channel": "chan-r"}}, updated_by="admin-1")

        assert settings.reviews_channel == "chan-r"
        assert settings.cooldowns.review_request == 86_400_000

    def test_stamps_last_updated_by(self):
        settings = _make_settings()
        settings.apply_changes({"roles": {"staff_role": "role-1"}}, updated_by="admin-7")
        assert settings.last_updated_by == "admin-7"

    def test_top_level_language(self):
        settings = _make_settings()
        settings.apply_changes({"default_language": "de"}, updated_by="admin-1")
        assert settings.default_language == "de"

    def test_unknown_group_rejected(self):
        settings = _make_settings()
        with pytest.raises(ValidationError) as exc:
            settings.apply_changes({"colours": {"primary": "red"}}, updated_by="admin-1")
        assert "colours" in exc.value.messages

    def test_unknown_key_rejected(self):
        settings = _make_settings()
        with pytest.raises(ValidationError) as exc:
            settings.apply_changes({"features": {"auto_ban": True}}, updated_by="admin-1")
        assert exc.value.messages["features"] == ["Unknown setting: auto_ban"]

    def test_min_rating_above_max_rejected(self):
        settings = _make_settings()
        with pytest.raises(ValidationError):
            settings.apply_changes({"review": {"min_rating": 4, "max_rating": 2}}, updated_by="admin-1")

    def test_update_raises_event_with_changes(self):
        settings = _make_settings()
        settings._events.clear()
        changes = {"cooldowns": {"review_submission": 0}}
        settings.apply_changes(changes, updated_by="admin-1")

        event = settings._events[0]
        assert event.__class__.__name__ == "GuildSettingsUpdated"
        assert json.loads(event.changes) == changes
        assert str(event.updated_by) == "admin-1"


class TestView:
    def test_view_is_nested_dict(self):
        view = _make_settings("guild-v").to_view()
        assert view["guild_id"] == "guild-v"
        assert view["features"]["enable_cooldowns"] is True
        assert view["review"]["max_rating"] == 5
