import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the domain.toml overlay before any domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    # Adapters resolved from settings must never reach a real provider in tests
    os.environ.setdefault("DISTANCE_ESTIMATOR", "fixed")
    os.environ.setdefault("SMS_ADAPTER", "fake")
    os.environ.setdefault("FANOUT_BACKOFF_SECONDS", "0")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
