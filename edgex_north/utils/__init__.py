from .exceptions import ConfigError, ProtocolError, TransportError
