"""HTTP clients."""

from payrails_cse.clients.tokenization_client import (
    TokenizationClient,
    build_headers,
    build_request,
)

__all__ = ["TokenizationClient", "build_headers", "build_request"]
