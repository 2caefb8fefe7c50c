"""Initialization payload and tokenization request models."""

from typing import Optional
from uuid import UUID

from payrails_cse.models.base import WireModel
from payrails_cse.models.card import FutureUsage


class Link(WireModel):
    """HTTP method and absolute URL of a server action."""

    method: str
    href: str


class Links(WireModel):
    tokenize: Link


class Tokenization(WireModel):
    """Classic key source: tokenization session with its own submit link."""

    id: UUID
    public_key: str
    links: Links
    vault_provider_config_id: Optional[str] = None


class VaultConfiguration(WireModel):
    """Vault key source: encryption key and provider configuration only."""

    encryption_public_key: str
    provider_config_id: str


KeySource = Tokenization | VaultConfiguration


class CSEConfiguration(WireModel):
    """Decoded initialization payload.

    Both key source fields are optional on the wire. The resolver
    enforces that at least one of them is present.
    """

    token: str
    holder_reference: str
    tokenization: Optional[Tokenization] = None
    vault_configuration: Optional[VaultConfiguration] = None

    @property
    def key_source(self) -> Optional[KeySource]:
        """First populated key source, tokenization before vault."""
        if self.tokenization is not None:
            return self.tokenization
        return self.vault_configuration


class InitResponse(WireModel):
    """Server init response wrapping the base64 configuration payload."""

    version: str
    data: str


class TokenizationRequest(WireModel):
    """JSON body of the tokenize call."""

    id: Optional[UUID] = None
    holder_reference: str
    encrypted_instrument_details: str
    future_usage: Optional[FutureUsage] = None
    store_instrument: Optional[bool] = None
    vault_provider_config_id: Optional[str] = None
