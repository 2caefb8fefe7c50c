"""Tokenization API client: encrypt card data and submit it for tokenization."""

import uuid
from typing import Optional

import httpx
import structlog

from payrails_cse.config import settings
from payrails_cse.domain.classifier import ResponseClassifier
from payrails_cse.domain.config_resolver import ConfigResolver
from payrails_cse.domain.encryption import EnvelopeBuilder
from payrails_cse.models.card import Card, FutureUsage
from payrails_cse.models.configuration import TokenizationRequest
from payrails_cse.models.exceptions import (
    InvalidEndpointError,
    MissingConfigError,
    NetworkError,
    NetworkTimeout,
)
from payrails_cse.models.outcome import TokenizeOutcome

logger = structlog.get_logger(__name__)


def build_request(
    resolver: ConfigResolver,
    envelope: str,
    future_usage: Optional[FutureUsage] = None,
    store_instrument: Optional[bool] = True,
) -> TokenizationRequest:
    """
    Build the tokenize request body for a resolved configuration.

    The holder reference always comes from the configuration, never from
    the caller. Vault-only configurations have no tokenization id, so the
    ``id`` field is left out of the body rather than invented.

    Args:
        resolver: Resolved configuration
        envelope: Compact JWE of the card data
        future_usage: Optional future usage policy
        store_instrument: Whether the server should store the instrument

    Returns:
        TokenizationRequest ready to serialize
    """
    return TokenizationRequest(
        id=resolver.tokenization_id(),
        holder_reference=resolver.holder_reference,
        encrypted_instrument_details=envelope,
        future_usage=FutureUsage(future_usage) if future_usage is not None else None,
        store_instrument=store_instrument,
        vault_provider_config_id=resolver.vault_provider_config_id(),
    )


def build_headers(auth_token: str, idempotency_key: str) -> dict[str, str]:
    """Headers for the tokenize call."""
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {auth_token}",
        "x-idempotency-key": idempotency_key,
    }


class TokenizationClient:
    """
    Client for the tokenization endpoint named in the CSE configuration.

    Each ``tokenize`` call encrypts the card into a fresh JWE envelope,
    posts it with a fresh idempotency key and classifies the response.
    The client never retries; transport failures are raised to the caller
    and end the call.

    Calls may run concurrently. The only shared state is the frozen
    configuration and the HTTP connection pool.
    """

    def __init__(
        self,
        resolver: Optional[ConfigResolver],
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None,
        envelope_builder: Optional[EnvelopeBuilder] = None,
        classifier: Optional[ResponseClassifier] = None,
    ):
        """
        Initialize the tokenization client.

        Args:
            resolver: Resolved configuration (None makes every tokenize call fail)
            http_client: Optional pre-configured HTTP client; the caller keeps
                ownership and must close it
            timeout_seconds: Request timeout when the client creates its own
                HTTP client (default: settings.http.timeout_seconds)
            envelope_builder: Envelope builder (default: EnvelopeBuilder())
            classifier: Response classifier (default: ResponseClassifier())
        """
        self.resolver = resolver
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.http.timeout_seconds
        )
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=self.timeout_seconds)
        self.envelope_builder = envelope_builder or EnvelopeBuilder()
        self.classifier = classifier or ResponseClassifier()

        logger.info(
            "tokenization_client_initialized",
            configured=resolver is not None,
            timeout_seconds=self.timeout_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool if this client created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    def _require_config(self) -> ConfigResolver:
        if self.resolver is None:
            raise MissingConfigError("Missing Config")
        return self.resolver

    async def tokenize(
        self,
        card: Card,
        future_usage: Optional[FutureUsage] = None,
        store_instrument: Optional[bool] = True,
    ) -> TokenizeOutcome:
        """
        Encrypt card data and submit it for tokenization.

        Args:
            card: Raw card fields; its holder reference is replaced by the
                configuration's. The reference is released once the
                envelope is built
            future_usage: Optional future usage policy
            store_instrument: Whether the server should store the instrument

        Returns:
            TokenizeSuccess (201 with instrument), TokenizeFailure (error list)
            or TokenizeEmpty (no body)

        Raises:
            MissingConfigError: No configuration, or no tokenize link
            InvalidEndpointError: Tokenize link is not a valid URL
            EncryptionError: Envelope could not be built (incl. KeyFormatError)
            NetworkTimeout: Request timed out
            NetworkError: Connection or other transport failure
            MalformedResponseError: Body does not match the schema for its status
        """
        resolver = self._require_config()
        method, url = resolver.submission_endpoint()

        bound_card = card.with_holder_reference(resolver.holder_reference)
        del card
        try:
            envelope = self.envelope_builder.encrypt(bound_card, resolver.public_key())
        finally:
            del bound_card

        request_body = build_request(resolver, envelope, future_usage, store_instrument)
        idempotency_key = str(uuid.uuid4())

        logger.info(
            "tokenize_request",
            method=method,
            url=url,
            correlation_id=idempotency_key,
            holder_reference=resolver.holder_reference,
            future_usage=request_body.future_usage,
            store_instrument=store_instrument,
        )

        try:
            response = await self.http_client.request(
                method,
                url,
                headers=build_headers(resolver.token, idempotency_key),
                content=request_body.model_dump_json(by_alias=True, exclude_none=True),
            )

        except httpx.TimeoutException as e:
            logger.error(
                "tokenize_timeout",
                url=url,
                correlation_id=idempotency_key,
                error=str(e),
            )
            raise NetworkTimeout("Tokenization request timed out") from e

        except httpx.InvalidURL as e:
            logger.error(
                "tokenize_invalid_url",
                url=url,
                correlation_id=idempotency_key,
                error=str(e),
            )
            raise InvalidEndpointError(f"Invalid tokenize URL: {url!r}") from e

        except httpx.RequestError as e:
            # Connection refused, DNS, TLS, protocol errors
            logger.error(
                "tokenize_network_error",
                url=url,
                correlation_id=idempotency_key,
                error=str(e),
            )
            raise NetworkError(f"Tokenization request failed: {e}") from e

        outcome = self.classifier.classify(response.status_code, response.content)

        logger.info(
            "tokenize_response_classified",
            status_code=response.status_code,
            outcome=type(outcome).__name__,
            correlation_id=idempotency_key,
        )

        return outcome

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
