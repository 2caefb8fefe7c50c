"""Public entry point: configure once, then encrypt or tokenize cards."""

from typing import Optional

import httpx

from payrails_cse.clients.tokenization_client import TokenizationClient
from payrails_cse.domain.config_resolver import ConfigResolver
from payrails_cse.domain.encryption import EnvelopeBuilder
from payrails_cse.logging_config import get_logger
from payrails_cse.models.card import Card, FutureUsage
from payrails_cse.models.configuration import InitResponse
from payrails_cse.models.outcome import TokenizeOutcome

logger = get_logger(__name__)


class PayrailsCSE:
    """
    Client-side encryption session built from a server init payload.

    Construction decodes the configuration and raises a ``ConfigError``
    subclass when it is unusable, so callers can choose their own
    fallback. The configuration is immutable for the life of the object.

    Example:
        >>> async with PayrailsCSE(data=init["data"], version=init["version"]) as cse:
        ...     outcome = await cse.tokenize("4111111111111111", "03", "2030")
    """

    def __init__(
        self,
        data: str,
        version: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self.version = version
        self.resolver = ConfigResolver.resolve(data)
        self.envelope_builder = EnvelopeBuilder()
        self.client = TokenizationClient(
            self.resolver,
            http_client=http_client,
            timeout_seconds=timeout_seconds,
            envelope_builder=self.envelope_builder,
        )

        logger.info("payrails_cse_initialized", version=version)

    @classmethod
    def from_init_response(
        cls,
        init_response: InitResponse,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None,
    ) -> "PayrailsCSE":
        """Build a session from a decoded ``{version, data}`` init response."""
        return cls(
            data=init_response.data,
            version=init_response.version,
            http_client=http_client,
            timeout_seconds=timeout_seconds,
        )

    def encrypt_card_data(self, card: Card) -> str:
        """Encrypt card data with the configured public key.

        The card is encrypted as given; use ``tokenize`` to have the
        session's holder reference bound into the payload.
        """
        return self.envelope_builder.encrypt(card, self.resolver.public_key())

    async def tokenize(
        self,
        card_number: str,
        expiry_month: str,
        expiry_year: str,
        holder_name: Optional[str] = None,
        security_code: Optional[str] = None,
        future_usage: Optional[FutureUsage] = None,
        store_instrument: Optional[bool] = True,
    ) -> TokenizeOutcome:
        """Encrypt the given card fields and submit them for tokenization.

        See ``TokenizationClient.tokenize`` for outcomes and errors. No
        ``Card`` is kept on this frame while the request is in flight.
        """
        return await self.client.tokenize(
            Card(
                card_number=card_number,
                expiry_month=expiry_month,
                expiry_year=expiry_year,
                holder_name=holder_name,
                security_code=security_code,
            ),
            future_usage=future_usage,
            store_instrument=store_instrument,
        )

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
