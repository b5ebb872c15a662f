import base64
import logging
from typing import Optional, Sequence, Union

import requests
import urllib3

from edgex_north.event import Envelope, build_envelopes
from edgex_north.reading import Reading
from edgex_north.utils.exceptions import (ConfigError, ProtocolError,
                                          TransportError)

from ._http import HttpTransport
from ._https import HttpsTransport
from .transport import BaseTransport

logger = logging.getLogger(__name__)

TRANSPORTS = {
    "http": HttpTransport,
    "https": HttpsTransport,
}

EVENT_PATH = "/v1/event"
SUCCESS_CODES = (200, 202)


class Exporter:
    """
    Sends batches of readings to the EdgeX core-data REST API.

    Each call to :meth:`send` posts one event per asset found in the batch and
    returns how many readings were accepted. Not reentrant: callers on
    multi-threaded hosts serialize calls to connect/authenticate/send.

    Typical usage:
        exporter = Exporter(scheme="http")
        exporter.connect("localhost", 48080)
        exporter.authenticate("user", "secret")
        sent = exporter.send(readings)
        exporter.disconnect()
    """

    def __init__(self, scheme: str = "http", timeout: float = 10.0, verify_ssl: Union[bool, str] = True) -> None:
        if scheme not in TRANSPORTS:
            raise ConfigError(f"Invalid scheme: {scheme}. Supported: {list(TRANSPORTS.keys())}")

        self.scheme = scheme
        self.timeout = timeout
        self.verify_ssl = verify_ssl

        self.host: Optional[str] = None
        self.port: Optional[int] = None
        self.url: Optional[str] = None
        self.headers = [("Content-Type", "application/json")]

        self._transport: Optional[BaseTransport] = None
        self._credentials: Optional[str] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.disconnect()

    @property
    def is_connected(self) -> bool:
        return self._transport is not None

    def connect(self, host: str, port: int):
        """
        Create the transport to the EdgeX core-data service at ``host:port``.

        Calling it again releases the previous transport before the new one
        replaces it.

        Raises:
            ConfigError: host is empty or not a valid hostname, or port is not
                a valid TCP port
        """
        if not host:
            raise ConfigError("EdgeX host is required")
        try:
            port = int(port)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid EdgeX port: {port!r}")
        if not 0 < port < 65536:
            raise ConfigError(f"Invalid EdgeX port: {port}")

        host_and_port = f"{host}:{port}"
        url = f"{self.scheme}://{host_and_port}{EVENT_PATH}"
        try:
            requests.PreparedRequest().prepare_url(url, None)
            urllib3.util.parse_url(url)
            # urllib3 passes the host through the idna codec when it opens the socket
            host.strip("[]").encode("idna")
        except (requests.exceptions.RequestException, urllib3.exceptions.HTTPError, UnicodeError) as e:
            raise ConfigError(f"Invalid EdgeX host: {host!r}") from e

        if self._transport is not None:
            logger.warning("Exporter already connected to %s, replacing the connection", self.url)
            self.disconnect()

        self._transport = self._create_transport(host_and_port)
        if self._credentials:
            self._transport.set_auth_basic_credentials(self._credentials)

        self.host = host
        self.port = port
        self.url = url
        logger.info("Exporter connected to %s", self.url)

    def authenticate(self, user: str, password: str):
        """
        Use basic authentication with the given user. Empty user and password
        switch back to unauthenticated requests.
        """
        if not user and not password:
            self._credentials = None
            if self._transport is not None:
                self._transport.clear_auth()
            return

        user = user or ""
        password = password or ""
        self._credentials = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
        if self._transport is not None:
            self._transport.set_auth_basic_credentials(self._credentials)

    def send(self, readings: Sequence[Reading]) -> int:
        """
        Send the readings to EdgeX, one POST per asset.

        Every successful POST adds the size of the whole batch to the returned
        count, so a batch spanning several assets can report more readings
        than it holds. A failed POST adds nothing; the remaining assets are
        still sent.

        Args:
            readings: The batch of readings to send

        Returns:
            int: the number of readings sent
        """
        if self._transport is None:
            raise ConfigError("Exporter.connect() must be called before send()")

        sent = 0
        for envelope in build_envelopes(readings):
            if self.__post(envelope):
                sent += len(readings)
        return sent

    def disconnect(self):
        if self._transport is None:
            return
        self._transport.close()
        self._transport = None
        logger.info("Exporter disconnected from %s", self.url)

    def _create_transport(self, host_and_port: str) -> BaseTransport:
        transport_class = TRANSPORTS[self.scheme]
        if transport_class is HttpsTransport:
            return transport_class(host_and_port, timeout=self.timeout, verify_ssl=self.verify_ssl)
        return transport_class(host_and_port, timeout=self.timeout)

    def __post(self, envelope: Envelope) -> bool:
        payload = envelope.to_json()
        logger.debug("Posting %d readings for asset %s to %s",
                     len(envelope.readings), envelope.device, self.url)
        try:
            status_code = self._transport.send_request("POST", self.url, self.headers, payload)
            if status_code not in SUCCESS_CODES:
                raise ProtocolError(self.url, status_code, self._transport.get_last_response_body())
            return True
        except ProtocolError as pe:
            logger.error("Failed to send to EdgeX %s, errorCode %d", pe.url, pe.status_code)
            logger.error("HTTP response: %s for payload %s", pe.response_body, payload)
        except TransportError as te:
            logger.error("Failed to send to EdgeX %s: %s for payload %s", self.url, te, payload)
        return False
