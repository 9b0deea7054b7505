import pytest
from protean.integrations.pytest import DomainFixture

GUILD_ID = "guild-1"
ADMIN_ID = "admin-1"
STAFF_ID = "staff-1"
STAFF_ROLE = "role-staff"
USER_ID = "user-1"

STAFF_CHANNEL = "chan-staff"
REVIEWS_CHANNEL = "chan-reviews"
LOGS_CHANNEL = "chan-logs"


@pytest.fixture(scope="session")
def reviewdesk_bed():
    from reviewdesk.domain import reviewdesk
    from reviewdesk.utils.db import drop_db, setup_db

    bed = DomainFixture(reviewdesk)
    bed.setup()
    setup_db(reviewdesk)
    yield bed
    drop_db(reviewdesk)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(reviewdesk_bed):
    from reviewdesk.gateway import reset_platform
    from reviewdesk.settings.store import reset_settings_store

    reset_platform()
    reset_settings_store()

    with reviewdesk_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_platform()
    reset_settings_store()


@pytest.fixture()
def platform():
    """The in-memory chat platform the workflows talk to."""
    from reviewdesk.gateway import get_platform

    return get_platform()


@pytest.fixture()
def guild(platform):
    """A guild with every channel routed, a staff role, one admin and one staff member."""
    from reviewdesk.settings.store import get_settings_store

    platform.make_administrator(GUILD_ID, ADMIN_ID)
    platform.grant_roles(GUILD_ID, STAFF_ID, STAFF_ROLE)

    get_settings_store().update(
        GUILD_ID,
        {
            "channels": {
                "staff_review_channel": STAFF_CHANNEL,
                "reviews_channel": REVIEWS_CHANNEL,
                "logs_channel": LOGS_CHANNEL,
            },
            "roles": {"staff_role": STAFF_ROLE},
        },
        updated_by=ADMIN_ID,
    )
    return GUILD_ID


@pytest.fixture()
def make_product(guild):
    """Create an active product in the guild and return its id."""
    from protean import current_domain
    from reviewdesk.product.management import CreateProduct

    def _make(name="Widget", price=9.99, description="A fine widget"):
        return current_domain.process(
            CreateProduct(
                guild_id=guild,
                name=name,
                description=description,
                price=price,
                staff_member_id=STAFF_ID,
                staff_member_username="Stella",
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def approve_user(guild):
    """Open a request for a member and approve it for the given product. Returns the request id."""
    from reviewdesk.request.approval import finalize_approval, select_product
    from reviewdesk.request.creation import request_review

    def _approve(product_id, user_id=USER_ID, username="Uma", staff_note=None):
        request_id = request_review(guild, user_id, username=username)
        token = select_product(guild, request_id, STAFF_ID, product_id)
        finalize_approval(token, STAFF_ID, staff_member_username="Stella", staff_note=staff_note)
        return request_id

    return _approve
