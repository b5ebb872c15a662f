"""EdgeX north plugin.

Lifecycle entry points called by the host pipeline:

    handle = plugin_init(config)
    sent = plugin_send(handle, readings)
    plugin_shutdown(handle)

``config`` is either a plain mapping (``{"host": "edgex", "port": 48080}``)
or the host's configuration category, where every item carries its value
under ``"value"``.
"""

import copy
import logging
from typing import Any, Dict, Literal, Sequence, Union

from pydantic import BaseModel, Field, ValidationError

from edgex_north import __version__
from edgex_north.exporter import Exporter
from edgex_north.reading import Reading
from edgex_north.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

PLUGIN_NAME = "EdgeX"
DEFAULT_PORT = 48080

DEFAULT_CONFIG = {
    "plugin": {
        "description": "EdgeX North",
        "type": "string",
        "default": PLUGIN_NAME,
        "readonly": "true"
    },
    "host": {
        "description": "The hostname of the EdgeX service",
        "type": "string",
        "default": "localhost",
        "order": "1",
        "displayName": "Hostname"
    },
    "port": {
        "description": "The port of the EdgeX core-data service",
        "type": "integer",
        "default": str(DEFAULT_PORT),
        "order": "2",
        "displayName": "Port"
    },
    "username": {
        "description": "The username within EdgeX",
        "type": "string",
        "default": "",
        "order": "3",
        "displayName": "Username"
    },
    "password": {
        "description": "The password for this user",
        "type": "password",
        "default": "",
        "order": "4",
        "displayName": "Password"
    },
    "source": {
        "description": "Defines the source of the data to be sent on the stream",
        "type": "enumeration",
        "default": "readings",
        "options": ["readings", "statistics"],
        "order": "5",
        "displayName": "Source"
    },
    "scheme": {
        "description": "Protocol used to reach the EdgeX service",
        "type": "enumeration",
        "default": "http",
        "options": ["http", "https"],
        "order": "6",
        "displayName": "Protocol"
    },
    "timeout": {
        "description": "Seconds to wait for EdgeX to answer a request",
        "type": "float",
        "default": "10",
        "order": "7",
        "displayName": "Timeout"
    },
    "verify_ssl": {
        "description": "Verify the certificate of the EdgeX service when using https",
        "type": "boolean",
        "default": "true",
        "order": "8",
        "displayName": "Verify Certificate"
    }
}


class PluginConfig(BaseModel):
    """
    Schema for the EdgeX north plugin configuration.
    """
    plugin: str = Field(PLUGIN_NAME, description="Name of the plugin.")
    host: str = Field("localhost", min_length=1, description="The hostname of the EdgeX service.")
    port: int = Field(DEFAULT_PORT, gt=0, lt=65536, description="The port of the EdgeX core-data service.")
    username: str = Field("", description="The username within EdgeX.")
    password: str = Field("", description="The password for this user.")
    source: Literal["readings", "statistics"] = Field("readings", description="Source of the data sent on the stream.")
    scheme: Literal["http", "https"] = Field("http", description="Protocol used to reach the EdgeX service.")
    timeout: float = Field(10.0, gt=0, description="Seconds to wait for EdgeX to answer a request.")
    verify_ssl: Union[bool, str] = Field(True, description="Verify the EdgeX certificate, or path to a CA bundle.")

    model_config = {
        "extra": "ignore"
    }


CONFIG_HELP = {
    "host": "The hostname of the EdgeX service",
    "port": "The port of the EdgeX core-data service",
    "username": "The username within EdgeX. Leave empty for unauthenticated requests.",
    "password": "The password for this user",
    "source": "Source of the data sent on the stream: readings or statistics",
    "scheme": "Protocol used to reach the EdgeX service: http or https",
    "timeout": "Seconds to wait for EdgeX to answer a request",
    "verify_ssl": "Verify the certificate of the EdgeX service (https only). true, false or path to a CA bundle",
}

CONFIG_EXAMPLE = {
    "host": "localhost",
    "port": DEFAULT_PORT,
    "username": "",
    "password": "",
    "source": "readings",
    "scheme": "http",
    "timeout": 10,
    "verify_ssl": True,
}


def _flatten_config(config: Dict[str, Any]) -> Dict[str, Any]:
    flat = {}
    for key, item in config.items():
        if isinstance(item, dict):
            if "value" in item:
                flat[key] = item["value"]
            elif "default" in item:
                flat[key] = item["default"]
        else:
            flat[key] = item
    return flat


def _parse_verify_ssl(value: Union[bool, str]) -> Union[bool, str]:
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return value


def load_config(config: Dict[str, Any]) -> PluginConfig:
    """
    Validate the plugin configuration.

    Raises:
        ConfigError: a value is missing or invalid
    """
    flat = _flatten_config(config or {})
    if "verify_ssl" in flat:
        flat["verify_ssl"] = _parse_verify_ssl(flat["verify_ssl"])
    try:
        return PluginConfig.model_validate(flat)
    except ValidationError as ve:
        raise ConfigError(f"Invalid EdgeX plugin configuration: {ve}") from ve


def plugin_info() -> Dict[str, Any]:
    """Return the information about this plugin"""
    return {
        "name": PLUGIN_NAME,
        "version": __version__,
        "mode": "none",
        "type": "north",
        "interface": "1.0.0",
        "config": copy.deepcopy(DEFAULT_CONFIG),
    }


def plugin_init(config: Dict[str, Any]) -> Exporter:
    """
    Initialise the plugin with configuration and return the handle used by
    plugin_send and plugin_shutdown.
    """
    cfg = load_config(config)

    exporter = Exporter(scheme=cfg.scheme, timeout=cfg.timeout, verify_ssl=cfg.verify_ssl)
    exporter.connect(cfg.host, cfg.port)
    if cfg.username or cfg.password:
        exporter.authenticate(cfg.username, cfg.password)

    logger.info("EdgeX plugin configured: host=%s, port=%d, source=%s", cfg.host, cfg.port, cfg.source)
    return exporter


def plugin_send(handle: Exporter, readings: Sequence[Reading]) -> int:
    """Send readings to EdgeX and return the number sent"""
    return handle.send(readings)


def plugin_shutdown(handle: Exporter) -> None:
    handle.disconnect()
