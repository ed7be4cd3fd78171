import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def dispatch_bed():
    from dispatch.domain import dispatch

    bed = DomainFixture(dispatch)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(dispatch_bed):
    with dispatch_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def _adapters(_ctx):
    """Start every test from freshly built adapters and an empty store."""
    from dispatch.channel import reset_sms_channel
    from dispatch.estimator import reset_estimator

    reset_estimator()
    reset_sms_channel()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()
    current_domain.event_store.store._data_reset()

    reset_estimator()
    reset_sms_channel()
