from typing import Union

from .transport import BaseTransport


class HttpsTransport(BaseTransport):
    SCHEME = "https"

    def __init__(self, host_and_port: str, timeout: float = 10.0, verify_ssl: Union[bool, str] = True) -> None:
        super().__init__(host_and_port, timeout)

        self.verify_ssl = verify_ssl
        # verify_ssl is either a bool or the path of a CA bundle, as requests expects

    def _request_options(self) -> dict:
        return {"verify": self.verify_ssl}
