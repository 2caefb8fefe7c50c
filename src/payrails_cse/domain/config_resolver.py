"""Decode the initialization payload into a typed configuration.

The server hands the client an opaque base64 string. This module turns
it into a frozen ``CSEConfiguration`` and projects the pieces the rest
of the library needs: the public key, the tokenize endpoint and the
identifiers that go into the request body. Nothing here touches the
network or performs cryptography.
"""

import base64
import binascii
import ipaddress
import json
import re
from typing import Optional
from uuid import UUID

import httpx
from pydantic import ValidationError

from payrails_cse.logging_config import get_logger
from payrails_cse.models.configuration import CSEConfiguration, KeySource
from payrails_cse.models.exceptions import (
    ConfigDecodeError,
    ConfigShapeError,
    InvalidEndpointError,
    MissingConfigError,
)

logger = get_logger(__name__)

_HOSTNAME = re.compile(r"^[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)*\.?$")


def _valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return _HOSTNAME.match(host) is not None
    return True


def _b64decode(data: str) -> bytes:
    """Strict standard-alphabet base64 decode that tolerates missing padding."""
    stripped = "".join(data.split())
    padded = stripped + "=" * (-len(stripped) % 4)
    return base64.b64decode(padded, validate=True)


class ConfigResolver:
    """Read-only view over a resolved configuration.

    Safe to share between concurrent tokenize calls: the underlying
    configuration model is frozen and the resolver holds no other state.
    """

    def __init__(self, configuration: CSEConfiguration):
        if configuration.key_source is None:
            raise ConfigShapeError(
                "Configuration has neither 'tokenization' nor 'vaultConfiguration'"
            )
        self._configuration = configuration

    @classmethod
    def resolve(cls, raw_payload: str) -> "ConfigResolver":
        """Decode a base64 JSON payload into a resolver.

        Args:
            raw_payload: Base64-encoded UTF-8 JSON configuration

        Returns:
            ConfigResolver over the decoded configuration

        Raises:
            ConfigDecodeError: If the payload is not base64, not UTF-8 JSON,
                or does not match the configuration wire shape
            ConfigShapeError: If no key source is present
        """
        if not raw_payload:
            raise ConfigDecodeError("Configuration payload is empty")

        try:
            decoded = _b64decode(raw_payload)
        except (binascii.Error, ValueError) as e:
            raise ConfigDecodeError("Failed to decode base64 configuration") from e

        try:
            document = json.loads(decoded.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigDecodeError("Configuration is not valid UTF-8 JSON") from e

        if not isinstance(document, dict):
            raise ConfigDecodeError("Configuration must be a JSON object")

        try:
            configuration = CSEConfiguration.model_validate(document)
        except ValidationError as e:
            raise ConfigDecodeError(f"Failed to parse configuration: {e}") from e

        resolver = cls(configuration)
        logger.debug(
            "cse_configuration_resolved",
            key_source=type(resolver.key_source).__name__,
            holder_reference=configuration.holder_reference,
        )
        return resolver

    @property
    def configuration(self) -> CSEConfiguration:
        return self._configuration

    @property
    def key_source(self) -> KeySource:
        # Never None: checked at construction
        return self._configuration.key_source  # type: ignore[return-value]

    @property
    def token(self) -> str:
        return self._configuration.token

    @property
    def holder_reference(self) -> str:
        return self._configuration.holder_reference

    def public_key(self) -> str:
        """Base64 DER RSA public key of the populated key source."""
        tokenization = self._configuration.tokenization
        if tokenization is not None:
            return tokenization.public_key
        return self._configuration.vault_configuration.encryption_public_key

    def tokenization_id(self) -> Optional[UUID]:
        """Tokenization session id, or None for vault-only configurations."""
        tokenization = self._configuration.tokenization
        return tokenization.id if tokenization is not None else None

    def vault_provider_config_id(self) -> Optional[str]:
        """Vault provider configuration id, from whichever source carries one."""
        tokenization = self._configuration.tokenization
        if tokenization is not None:
            return tokenization.vault_provider_config_id
        return self._configuration.vault_configuration.provider_config_id

    def submission_endpoint(self) -> tuple[str, str]:
        """HTTP method and URL of the tokenize link.

        Returns:
            (method, url) tuple, method upper-cased

        Raises:
            MissingConfigError: If the configuration has no tokenization link
            InvalidEndpointError: If the link is not an absolute http(s) URL
                with a well-formed host and port
        """
        tokenization = self._configuration.tokenization
        if tokenization is None:
            raise MissingConfigError("Missing tokenization config")

        link = tokenization.links.tokenize
        try:
            url = httpx.URL(link.href)
        except (httpx.InvalidURL, ValueError) as e:
            raise InvalidEndpointError(f"Invalid tokenize URL: {link.href!r}") from e

        host = url.raw_host.decode("ascii", errors="replace")
        if url.scheme not in ("http", "https") or not host or not _valid_host(host):
            raise InvalidEndpointError(f"Invalid tokenize URL: {link.href!r}")
        if url.port is not None and not 0 < url.port < 65536:
            raise InvalidEndpointError(f"Invalid tokenize URL: {link.href!r}")

        method = link.method.strip().upper()
        if not method:
            raise InvalidEndpointError("Tokenize link has an empty method")

        return method, link.href
