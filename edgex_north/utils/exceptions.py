class ConfigError(Exception):
    """Raised when the exporter or plugin configuration is missing or invalid."""
    pass


class TransportError(Exception):
    """Raised by a transport when a request could not be delivered at all
    (connection refused, TLS failure, timeout)."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url


class ProtocolError(Exception):
    """The historian answered with a status other than 200 or 202."""

    def __init__(self, url: str, status_code: int, response_body: str = "") -> None:
        super().__init__(f"{url} returned HTTP {status_code}")
        self.url = url
        self.status_code = status_code
        self.response_body = response_body
