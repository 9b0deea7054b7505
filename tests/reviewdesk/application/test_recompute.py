"""Application tests for rating recomputation."""

from protean import current_domain
from reviewdesk.product.catalog import load_product, view_product
from reviewdesk.product.product import Product
from reviewdesk.product.rating import RatingSummary, recompute_product_rating
from reviewdesk.review.removal import delete_review
from reviewdesk.review.submission import submit_review

TEXT = "A perfectly reasonable review"


def _review_as(guild, approve_user, product_id, user_id, rating):
    approve_user(product_id, user_id=user_id, username=user_id)
    return submit_review(guild, user_id, text=TEXT, rating=rating)


class TestRecompute:
    def test_averages_across_members(self, guild, make_product, approve_user):
        product_id = make_product()
        for user_id, rating in (("user-a", 5), ("user-b", 4), ("user-c", 4)):
            _review_as(guild, approve_user, product_id, user_id, rating)

        product = load_product(guild, product_id)
        assert product.review_count == 3
        assert product.total_rating_sum == 13
        assert product.average_rating == 4.3

    def test_is_idempotent(self, guild, make_product, approve_user):
        product_id = make_product()
        _review_as(guild, approve_user, product_id, "user-a", 4)

        first = recompute_product_rating(product_id)
        second = recompute_product_rating(product_id)
        assert first == second == RatingSummary(review_count=1, average_rating=4.0, total_rating_sum=4)

    def test_heals_drifted_aggregates(self, guild, make_product, approve_user):
        product_id = make_product()
        _review_as(guild, approve_user, product_id, "user-a", 2)

        repo = current_domain.repository_for(Product)
        product = repo.get(product_id)
        product.review_count = 7
        product.total_rating_sum = 30
        product.average_rating = 4.3
        repo.add(product)

        product = view_product(guild, product_id)
        assert (product.review_count, product.total_rating_sum, product.average_rating) == (1, 2, 2.0)

    def test_deleted_reviews_excluded(self, guild, make_product, approve_user):
        product_id = make_product()
        _review_as(guild, approve_user, product_id, "user-a", 5)
        doomed = _review_as(guild, approve_user, product_id, "user-b", 1)

        delete_review(guild, doomed.id, "staff-1")
        assert recompute_product_rating(product_id).average_rating == 5.0

    def test_product_without_reviews(self, guild, make_product):
        product_id = make_product()
        assert recompute_product_rating(product_id) == RatingSummary()
