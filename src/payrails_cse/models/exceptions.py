"""Custom exceptions for the client-side encryption library."""


class PayrailsCSEError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigError(PayrailsCSEError):
    """
    Raised when the initialization payload is malformed or incomplete.

    This is fatal to the client instance. It is raised at construction
    or on first use, never on a per-card basis.
    """

    pass


class ConfigDecodeError(ConfigError):
    """Raised when the payload is not valid base64-encoded JSON configuration."""

    pass


class ConfigShapeError(ConfigError):
    """Raised when neither `tokenization` nor `vaultConfiguration` is present."""

    pass


class MissingConfigError(ConfigError):
    """
    Raised when an operation needs configuration that was never resolved.

    Also raised when a vault-only configuration is asked for the
    tokenize link, which only the `tokenization` variant carries.
    """

    pass


class InvalidEndpointError(ConfigError):
    """Raised when the configured tokenize link is not an absolute http(s) URL."""

    pass


class EncryptionError(PayrailsCSEError):
    """
    Raised when building the JWE envelope fails.

    Fatal to that call only. No partial envelope is ever returned.
    """

    pass


class KeyMaterialError(EncryptionError):
    """Raised when the public key cannot be turned into usable key material."""

    pass


class KeyFormatError(KeyMaterialError):
    """
    Raised when the public key is undecodable or of the wrong type or size.

    Examples:
    - not valid base64
    - not DER encoded
    - an EC key instead of RSA
    - an RSA key that is not 2048 bits
    """

    pass


class TransportError(PayrailsCSEError):
    """Base exception for failures below the HTTP response level."""

    pass


class NetworkError(TransportError):
    """
    Raised on DNS, connection, TLS or read failures.

    Terminal for the call. The client never retries; a new call gets a
    new idempotency key.
    """

    pass


class NetworkTimeout(NetworkError):
    """Raised when the tokenize request times out."""

    pass


class ProtocolError(PayrailsCSEError):
    """Base exception for responses that do not match the expected contract."""

    pass


class MalformedResponseError(ProtocolError):
    """
    Raised when a response body cannot be decoded for its status code.

    A 201 body must be an instrument, any other status body must be an
    error list. There is no fallback from one schema to the other.
    """

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code
