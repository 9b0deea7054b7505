"""Application tests for staff edits and soft deletion of reviews."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from reviewdesk.audit.log import StaffActionLog
from reviewdesk.exceptions import AlreadyDeleted, Forbidden, ReviewNotFound
from reviewdesk.product.catalog import load_product
from reviewdesk.review.editing import edit_review
from reviewdesk.review.lookup import load_review
from reviewdesk.review.queries import user_reviews
from reviewdesk.review.removal import delete_review
from reviewdesk.review.submission import submit_review

STAFF_ID = "staff-1"
USER_ID = "user-1"


@pytest.fixture()
def review(guild, make_product, approve_user):
    approve_user(make_product(name="Widget"))
    return submit_review(guild, USER_ID, text="Great widget, would buy again", rating=5, username="Uma")


def _audit(guild, action_type):
    return current_domain.repository_for(StaffActionLog).entries(guild_id=guild, action_type=action_type)


class TestEditReview:
    def test_updates_review_and_product_rating(self, guild, review):
        edited = edit_review(guild, review.id, STAFF_ID, text="Good, but pricier than I hoped", rating=3)

        assert edited.rating == 3
        assert edited.last_edited_by == STAFF_ID
        assert load_product(guild, review.product_id).average_rating == 3.0

    def test_records_old_and_new_rating(self, guild, review):
        edit_review(guild, review.id, STAFF_ID, text="Good, but pricier than I hoped", rating=3)

        (entry,) = _audit(guild, "edit")
        assert entry.target_id == review.id
        assert entry.details_dict == {"old_rating": 5, "new_rating": 3, "review_user_id": USER_ID}

    def test_refreshes_public_post(self, guild, review, platform):
        edit_review(guild, review.id, STAFF_ID, text="Good, but pricier than I hoped", rating=3)

        (post,) = [m for m in platform.edited if m["message_id"] == review.message_id]
        assert post["embed"]["footer"] == "Edited by staff"
        assert post["embed"]["description"] == "Good, but pricier than I hoped"

    def test_post_update_failure_does_not_block(self, guild, review, platform):
        platform.configure(should_succeed=False, operations=("edit_message",))
        assert edit_review(guild, review.id, STAFF_ID, text="Still a fine widget", rating=4).rating == 4

    def test_member_cannot_edit(self, guild, review):
        with pytest.raises(Forbidden):
            edit_review(guild, review.id, USER_ID, text="I changed my mind", rating=1)

    def test_invalid_rating_leaves_review_unchanged(self, guild, review):
        with pytest.raises(ValidationError):
            edit_review(guild, review.id, STAFF_ID, text="Still a fine widget", rating=0)
        assert load_review(guild, review.id).rating == 5


class TestDeleteReview:
    def test_soft_deletes_and_recomputes(self, guild, review):
        delete_review(guild, review.id, STAFF_ID)

        stored = load_review(guild, review.id, include_deleted=True)
        assert stored.deleted_at is not None
        product = load_product(guild, review.product_id)
        assert product.review_count == 0
        assert product.average_rating == 0.0

    def test_hidden_from_listings(self, guild, review):
        delete_review(guild, review.id, STAFF_ID)
        assert user_reviews(guild, USER_ID) == []
        with pytest.raises(ReviewNotFound):
            load_review(guild, review.id)

    def test_removes_public_post(self, guild, review, platform):
        delete_review(guild, review.id, STAFF_ID)
        assert platform.deleted == [{"message_id": review.message_id, "channel_id": "chan-reviews"}]

    def test_records_audit_entry(self, guild, review):
        delete_review(guild, review.id, STAFF_ID)

        (entry,) = _audit(guild, "delete")
        assert entry.details_dict["review_user_id"] == USER_ID
        assert entry.details_dict["product_id"] == review.product_id

    def test_second_delete_rejected(self, guild, review):
        delete_review(guild, review.id, STAFF_ID)
        with pytest.raises(AlreadyDeleted):
            delete_review(guild, review.id, STAFF_ID)
        assert len(_audit(guild, "delete")) == 1

    def test_deleted_review_cannot_be_edited(self, guild, review):
        delete_review(guild, review.id, STAFF_ID)
        with pytest.raises(ReviewNotFound):
            edit_review(guild, review.id, STAFF_ID, text="Bringing it back", rating=4)

    def test_other_guild(self, guild, review, platform):
        platform.make_administrator("guild-2", "admin-2")
        with pytest.raises(ReviewNotFound):
            delete_review("guild-2", review.id, "admin-2")
