import copy
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

import edgex_north
from edgex_north import plugin
from edgex_north.reading import Datapoint, Reading
from edgex_north.utils.exceptions import ConfigError


@pytest.fixture
def session_request():
    with patch("requests.Session.request") as mock:
        mock.return_value = MagicMock(status_code=200, text="")
        yield mock


def test_plugin_info():
    info = edgex_north.plugin_info()

    assert info["name"] == "EdgeX"
    assert info["type"] == "north"
    assert info["interface"] == "1.0.0"
    assert info["version"] == edgex_north.__version__
    assert info["config"]["port"]["default"] == "48080"
    assert info["config"]["source"]["options"] == ["readings", "statistics"]

    info["config"]["host"]["default"] = "changed"
    assert plugin.DEFAULT_CONFIG["host"]["default"] == "localhost"


def test_init_with_default_category():
    handle = edgex_north.plugin_init(plugin.DEFAULT_CONFIG)

    assert handle.url == "http://localhost:48080/v1/event"
    assert handle.scheme == "http"
    assert handle.verify_ssl is True
    edgex_north.plugin_shutdown(handle)
    assert not handle.is_connected


def test_init_with_category_values(session_request):
    category = copy.deepcopy(plugin.DEFAULT_CONFIG)
    category["host"]["value"] = "edgex.local"
    category["port"]["value"] = "48443"
    category["scheme"]["value"] = "https"
    category["verify_ssl"]["value"] = "false"
    category["username"]["value"] = "admin"
    category["password"]["value"] = "secret"

    handle = edgex_north.plugin_init(category)
    reading = Reading("A", 1, datetime(2024, 5, 1, tzinfo=timezone.utc), [Datapoint("temp", 20)])
    sent = edgex_north.plugin_send(handle, [reading])
    edgex_north.plugin_shutdown(handle)

    assert sent == 1
    assert session_request.call_args.args == ("POST", "https://edgex.local:48443/v1/event")
    assert session_request.call_args.kwargs["verify"] is False
    assert session_request.call_args.kwargs["headers"]["Authorization"] == "Basic YWRtaW46c2VjcmV0"


def test_init_without_credentials_sends_unauthenticated(session_request):
    handle = edgex_north.plugin_init({"host": "edgex", "port": 48080})
    edgex_north.plugin_send(handle, [Reading("A", 1, 0, [Datapoint("v", 1)])])

    assert "Authorization" not in session_request.call_args.kwargs["headers"]


def test_load_config_defaults():
    cfg = plugin.load_config({})

    assert cfg.host == "localhost"
    assert cfg.port == 48080
    assert cfg.source == "readings"
    assert cfg.scheme == "http"
    assert cfg.timeout == 10.0


@pytest.mark.parametrize("config", [
    {"host": ""},
    {"port": "abc"},
    {"port": 70000},
    {"source": "audit"},
    {"scheme": "mqtt"},
    {"timeout": 0},
])
def test_invalid_config_is_fatal(config):
    with pytest.raises(ConfigError):
        edgex_north.plugin_init(config)
