from .transport import BaseTransport


class HttpTransport(BaseTransport):
    SCHEME = "http"
