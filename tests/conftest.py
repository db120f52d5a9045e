"""Pytest fixtures for EDGEBLOCK tests."""

import pytest

from edgeblock import create_app
from edgeblock.core.edgeos import reset_config_manager, stop_config_watcher
from edgeblock.models.settings import Settings


SAMPLE_CONFIG = """\
blacklist {
    disabled false
    dns-redirect-ip 0.0.0.0
    domains {
        include adsrvr.org
        include adtechus.net
        source malc0de {
            description "List of zones serving malicious executables"
            prefix "zone "
            url http://malc0de.com/bl/ZONES
        }
        source yoyo {
            description "Fully Qualified Domain Names only"
            prefix ""
            url https://pgl.yoyo.org/as/serverlist.php
        }
    }
    exclude 122.2o7.net
    exclude 1e100.net
    exclude googleadservices.com
    hosts {
        dns-redirect-ip 192.168.168.1
        exclude cfvod.kaltura.com
        include beap.gemini.yahoo.com
        source openphish {
            description "OpenPhish automatic phishing detection"
            prefix http
            url https://openphish.com/feed.txt
        }
        source tasty {
            description "File source"
            dns-redirect-ip 10.10.10.10
            file /config/user-data/blist.hosts.src
        }
    }
}
/* Warning: Do not remove the following line. */
"""


@pytest.fixture
def sample_config_text():
    """Representative EdgeOS blacklist configuration dump."""
    return SAMPLE_CONFIG


@pytest.fixture
def settings():
    """Default settings bag."""
    return Settings()


@pytest.fixture
def config_file(tmp_path, sample_config_text):
    """Write the sample dump to a temporary config.boot."""
    path = tmp_path / "config.boot"
    path.write_text(sample_config_text, encoding="utf-8")
    return path


@pytest.fixture
def app():
    """Create application for testing.

    Returns:
        Flask: Application configured for testing
    """
    reset_config_manager()
    app = create_app('testing')
    yield app
    stop_config_watcher()
    reset_config_manager()


@pytest.fixture
def client(app):
    """Create test client.

    Args:
        app: Flask application fixture

    Returns:
        FlaskClient: Test client for making requests
    """
    return app.test_client()
