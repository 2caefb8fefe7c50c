"""JWE envelope construction for card data.

Card fields are serialized to canonical JSON and wrapped in a compact
JSON Web Encryption token for the server's RSA public key. The algorithm
pair is fixed and never negotiated:

- key management: RSA-OAEP-256 (RSA-OAEP with SHA-256 and MGF1-SHA-256)
- content encryption: A256CBC-HS512 (AES-256-CBC with HMAC-SHA-512)

A fresh content-encryption key and IV are generated for every call, so
the same card encrypted twice never yields the same envelope.
"""

import base64
import binascii

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwe
from jose.constants import ALGORITHMS
from jose.exceptions import JOSEError

from payrails_cse.logging_config import get_logger
from payrails_cse.models.card import Card
from payrails_cse.models.exceptions import EncryptionError, KeyFormatError

logger = get_logger(__name__)

KEY_MANAGEMENT_ALGORITHM = ALGORITHMS.RSA_OAEP_256
CONTENT_ENCRYPTION_ALGORITHM = ALGORITHMS.A256CBC_HS512
RSA_KEY_SIZE_BITS = 2048


def load_public_key(public_key_b64: str) -> rsa.RSAPublicKey:
    """Decode a base64 DER RSA public key.

    Accepts SubjectPublicKeyInfo and bare PKCS#1 ``RSAPublicKey`` DER.

    Args:
        public_key_b64: Base64-encoded DER public key

    Returns:
        RSA public key object

    Raises:
        KeyFormatError: If the key is not base64 DER, not RSA, or not 2048 bits
    """
    if not public_key_b64:
        raise KeyFormatError("Public key is empty")

    try:
        der = base64.b64decode("".join(public_key_b64.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyFormatError("Public key is not valid base64") from e

    try:
        public_key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyFormatError("Public key is not a valid DER public key") from e

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise KeyFormatError(
            f"Public key must be RSA, got {type(public_key).__name__}"
        )

    if public_key.key_size != RSA_KEY_SIZE_BITS:
        raise KeyFormatError(
            f"RSA public key must be {RSA_KEY_SIZE_BITS} bits, got {public_key.key_size}"
        )

    return public_key


class EnvelopeBuilder:
    """Builds compact JWE envelopes around card data.

    Stateless; one instance can serve concurrent calls. Keys are loaded
    per call and never cached.
    """

    def encrypt(self, card: Card, public_key_b64: str) -> str:
        """Encrypt card data into a compact JWE serialization.

        Args:
            card: Card fields to encrypt
            public_key_b64: Base64-encoded DER RSA-2048 public key

        Returns:
            Five-part compact JWE string (header.encryptedKey.iv.ciphertext.tag)

        Raises:
            KeyFormatError: If the public key is unusable
            EncryptionError: If the JOSE layer fails
        """
        public_key = load_public_key(public_key_b64)
        key_pem = public_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

        plaintext = card.to_json_bytes()
        try:
            token = jwe.encrypt(
                plaintext,
                key_pem,
                encryption=CONTENT_ENCRYPTION_ALGORITHM,
                algorithm=KEY_MANAGEMENT_ALGORITHM,
            )
        except (JOSEError, ValueError, TypeError) as e:
            logger.error("card_encryption_failed", error_type=type(e).__name__)
            raise EncryptionError(f"Failed to encrypt card data: {e}") from e
        finally:
            # Best effort: drop the plaintext reference as soon as possible
            del plaintext

        envelope = token.decode("ascii") if isinstance(token, bytes) else token
        logger.debug("card_encrypted", envelope_length=len(envelope))
        return envelope


def encrypt_card(card: Card, public_key_b64: str) -> str:
    """Convenience wrapper around ``EnvelopeBuilder().encrypt``."""
    return EnvelopeBuilder().encrypt(card, public_key_b64)
