from .get_endpoint import get_endpoint
from .http_client import FreispaceClient, HttpResponse
from .response_utils import ensure_payload, parse_payload, require_argument

__all__ = [
    "FreispaceClient",
    "HttpResponse",
    "ensure_payload",
    "get_endpoint",
    "parse_payload",
    "require_argument",
]
