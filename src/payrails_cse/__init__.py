"""Client-side card encryption and tokenization.

The library logs through structlog and leaves output configuration to the
host application. Call ``configure_from_settings()`` (driven by the
``PAYRAILS_CSE_LOGGING__*`` environment variables) or
``configure_logging()`` once at startup to get JSON or console output with
card and credential fields redacted.
"""

from payrails_cse.clients.tokenization_client import TokenizationClient
from payrails_cse.cse import PayrailsCSE
from payrails_cse.domain.classifier import ResponseClassifier
from payrails_cse.domain.config_resolver import ConfigResolver
from payrails_cse.domain.encryption import EnvelopeBuilder
from payrails_cse.logging_config import configure_from_settings, configure_logging
from payrails_cse.models import (
    Card,
    ConfigDecodeError,
    ConfigError,
    ConfigShapeError,
    EncryptionError,
    FutureUsage,
    InitResponse,
    Instrument,
    InvalidEndpointError,
    KeyFormatError,
    KeyMaterialError,
    MalformedResponseError,
    MissingConfigError,
    NetworkError,
    NetworkTimeout,
    PayrailsCSEError,
    PayrailsError,
    ProtocolError,
    TokenizeEmpty,
    TokenizeFailure,
    TokenizeOutcome,
    TokenizeSuccess,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "PayrailsCSE",
    "TokenizationClient",
    "ResponseClassifier",
    "ConfigResolver",
    "EnvelopeBuilder",
    "configure_logging",
    "configure_from_settings",
    "Card",
    "FutureUsage",
    "InitResponse",
    "Instrument",
    "PayrailsError",
    "TokenizeEmpty",
    "TokenizeFailure",
    "TokenizeOutcome",
    "TokenizeSuccess",
    "PayrailsCSEError",
    "ConfigError",
    "ConfigDecodeError",
    "ConfigShapeError",
    "MissingConfigError",
    "InvalidEndpointError",
    "EncryptionError",
    "KeyMaterialError",
    "KeyFormatError",
    "TransportError",
    "NetworkError",
    "NetworkTimeout",
    "ProtocolError",
    "MalformedResponseError",
]
