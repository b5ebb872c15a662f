from ._http import HttpTransport
from ._https import HttpsTransport
from .exporter import EVENT_PATH, TRANSPORTS, Exporter
from .transport import BaseTransport
