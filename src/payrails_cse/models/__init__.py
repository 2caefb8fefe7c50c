"""Domain models for the client-side encryption library."""

from payrails_cse.models.card import Card, FutureUsage
from payrails_cse.models.configuration import (
    CSEConfiguration,
    InitResponse,
    KeySource,
    Link,
    Links,
    Tokenization,
    TokenizationRequest,
    VaultConfiguration,
)
from payrails_cse.models.exceptions import (
    ConfigDecodeError,
    ConfigError,
    ConfigShapeError,
    EncryptionError,
    InvalidEndpointError,
    KeyFormatError,
    KeyMaterialError,
    MalformedResponseError,
    MissingConfigError,
    NetworkError,
    NetworkTimeout,
    PayrailsCSEError,
    ProtocolError,
    TransportError,
)
from payrails_cse.models.instrument import (
    Instrument,
    InstrumentData,
    InstrumentStatus,
    PaymentMethodType,
    PayrailsError,
    PayrailsErrorList,
)
from payrails_cse.models.outcome import (
    TokenizeEmpty,
    TokenizeFailure,
    TokenizeOutcome,
    TokenizeSuccess,
)
from payrails_cse.models.values import ScalarKind, ScalarValue

__all__ = [
    "Card",
    "FutureUsage",
    "CSEConfiguration",
    "InitResponse",
    "KeySource",
    "Link",
    "Links",
    "Tokenization",
    "TokenizationRequest",
    "VaultConfiguration",
    "ConfigDecodeError",
    "ConfigError",
    "ConfigShapeError",
    "EncryptionError",
    "InvalidEndpointError",
    "KeyFormatError",
    "KeyMaterialError",
    "MalformedResponseError",
    "MissingConfigError",
    "NetworkError",
    "NetworkTimeout",
    "PayrailsCSEError",
    "ProtocolError",
    "TransportError",
    "Instrument",
    "InstrumentData",
    "InstrumentStatus",
    "PaymentMethodType",
    "PayrailsError",
    "PayrailsErrorList",
    "TokenizeEmpty",
    "TokenizeFailure",
    "TokenizeOutcome",
    "TokenizeSuccess",
    "ScalarKind",
    "ScalarValue",
]
