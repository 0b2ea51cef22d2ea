"""Hub do Desenvolvedor client: CNPJ and CEP lookups over HTTPS/JSON."""

from .client import HubDoDevClient
from .config import Config
from .errors import HubDoDevError, TransportError, UnknownUpstreamError, UpstreamError
from .models import QueryParam, RequestOptions, ResponseEnvelope

__all__ = [
    "HubDoDevClient",
    "Config",
    "HubDoDevError",
    "UpstreamError",
    "UnknownUpstreamError",
    "TransportError",
    "QueryParam",
    "RequestOptions",
    "ResponseEnvelope",
]
