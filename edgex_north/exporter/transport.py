import logging
from typing import Dict, Iterable, Optional, Tuple, Union

import requests
import urllib3

from edgex_north.utils.exceptions import TransportError

logger = logging.getLogger(__name__)

Headers = Union[Dict[str, str], Iterable[Tuple[str, str]]]


class BaseTransport:
    """
    Blocking HTTP client bound to one ``host:port``. Use as a super class for
    the scheme specific transports used by the Exporter.
    """

    SCHEME = None

    def __init__(self, host_and_port: str, timeout: float = 10.0) -> None:
        self.host_and_port = host_and_port
        self.timeout = timeout

        self._session = requests.Session()
        self._auth_token: Optional[str] = None
        self._last_response_body = ""

    def set_auth_basic_credentials(self, token: str):
        """
        Use HTTP basic authentication for all following requests.

        Args:
            token (str): base64 encoded ``user:password``
        """
        self._auth_token = token

    def clear_auth(self):
        self._auth_token = None

    def send_request(self, method: str, url: str, headers: Headers, body: str) -> int:
        """
        Send one request and wait for the response.

        Returns:
            int: the HTTP status code

        Raises:
            TransportError: no response was received
        """
        request_headers = dict(headers)
        if self._auth_token:
            request_headers["Authorization"] = f"Basic {self._auth_token}"

        try:
            response = self._session.request(
                method,
                url,
                headers=request_headers,
                data=body.encode("utf-8"),
                timeout=self.timeout,
                **self._request_options(),
            )
        except (requests.exceptions.RequestException, urllib3.exceptions.HTTPError, ValueError) as e:
            self._last_response_body = ""
            raise TransportError(url, str(e)) from e

        self._last_response_body = response.text
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response.status_code

    def get_last_response_body(self) -> str:
        return self._last_response_body

    def close(self):
        self._session.close()

    def _request_options(self) -> dict:
        return {}
