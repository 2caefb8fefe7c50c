"""Unit tests for JWE envelope construction."""

import base64
import json
import os
from unittest.mock import patch

import pytest
from cryptography.hazmat.primitives import serialization
from jose import jwe
from jose.exceptions import JWEError

from payrails_cse.domain import encryption
from payrails_cse.domain.encryption import EnvelopeBuilder, encrypt_card, load_public_key
from payrails_cse.models.card import Card
from payrails_cse.models.exceptions import EncryptionError, KeyFormatError, KeyMaterialError


@pytest.fixture
def builder():
    return EnvelopeBuilder()


class TestLoadPublicKey:
    """Tests for public key decoding and validation."""

    def test_load_spki_key(self, public_key_b64):
        """Test that a SubjectPublicKeyInfo DER key loads as 2048-bit RSA."""
        key = load_public_key(public_key_b64)

        assert key.key_size == 2048

    def test_load_pkcs1_key(self, rsa_private_key):
        """Test that a bare PKCS#1 RSAPublicKey DER key is also accepted."""
        der = rsa_private_key.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.PKCS1,
        )

        key = load_public_key(base64.b64encode(der).decode("ascii"))

        assert key.public_numbers() == rsa_private_key.public_key().public_numbers()

    def test_empty_key_raises_error(self):
        with pytest.raises(KeyFormatError, match="empty"):
            load_public_key("")

    def test_invalid_base64_raises_error(self):
        with pytest.raises(KeyFormatError, match="base64"):
            load_public_key("%%%not-base64%%%")

    def test_garbage_der_raises_error(self):
        """Test that random bytes are rejected as DER."""
        garbage = base64.b64encode(os.urandom(64)).decode("ascii")

        with pytest.raises(KeyFormatError, match="DER"):
            load_public_key(garbage)

    def test_ec_key_raises_error(self, ec_public_key_b64):
        """Test that a non-RSA key is rejected."""
        with pytest.raises(KeyFormatError, match="must be RSA"):
            load_public_key(ec_public_key_b64)

    def test_wrong_rsa_size_raises_error(self, small_rsa_public_key_b64):
        """Test that an RSA key that is not 2048 bits is rejected."""
        with pytest.raises(KeyFormatError, match="2048 bits, got 1024"):
            load_public_key(small_rsa_public_key_b64)

    def test_key_format_error_is_encryption_error(self):
        """Test the error hierarchy callers rely on."""
        assert issubclass(KeyFormatError, KeyMaterialError)
        assert issubclass(KeyMaterialError, EncryptionError)


class TestEnvelopeBuilder:
    """Tests for RSA-OAEP-256 / A256CBC-HS512 compact JWE envelopes."""

    def test_encrypt_produces_five_part_compact_jwe(self, builder, card, public_key_b64):
        envelope = builder.encrypt(card, public_key_b64)

        parts = envelope.split(".")
        assert len(parts) == 5
        assert all(parts)

    def test_header_uses_fixed_algorithms(self, builder, card, public_key_b64):
        envelope = builder.encrypt(card, public_key_b64)

        header = jwe.get_unverified_header(envelope)
        assert header["alg"] == "RSA-OAEP-256"
        assert header["enc"] == "A256CBC-HS512"

    def test_encrypt_same_input_differs(self, builder, card, public_key_b64):
        """Test that each call uses a fresh content key and IV."""
        first = builder.encrypt(card, public_key_b64)
        second = builder.encrypt(card, public_key_b64)

        assert first != second
        assert first.split(".")[1] != second.split(".")[1]
        assert first.split(".")[2] != second.split(".")[2]

    def test_decrypt_recovers_canonical_json(self, builder, card, public_key_b64, private_key_pem):
        """Test that the private key recovers the exact card JSON."""
        envelope = builder.encrypt(card, public_key_b64)

        plaintext = jwe.decrypt(envelope, private_key_pem)

        assert plaintext == (
            b'{"cardNumber":"4111111111111111","expiryMonth":"03","expiryYear":"2030",'
            b'"holderName":"John Doe","securityCode":"737"}'
        )

    def test_absent_optional_fields_are_omitted(
        self, builder, minimal_card, public_key_b64, private_key_pem
    ):
        """Test that unset optional fields are left out rather than null."""
        envelope = builder.encrypt(minimal_card, public_key_b64)

        decoded = json.loads(jwe.decrypt(envelope, private_key_pem))

        assert decoded == {
            "cardNumber": "5555555555554444",
            "expiryMonth": "12",
            "expiryYear": "2031",
        }
        assert "holderName" not in decoded
        assert "securityCode" not in decoded

    def test_holder_reference_is_encrypted_when_bound(
        self, builder, card, public_key_b64, private_key_pem
    ):
        envelope = builder.encrypt(card.with_holder_reference("holder-ref-123"), public_key_b64)

        decoded = json.loads(jwe.decrypt(envelope, private_key_pem))

        assert list(decoded)[0] == "holderReference"
        assert decoded["holderReference"] == "holder-ref-123"

    def test_unicode_holder_name(self, builder, public_key_b64, private_key_pem):
        card = Card(
            card_number="4111111111111111",
            expiry_month="01",
            expiry_year="2029",
            holder_name="Zoë Ångström",
        )

        envelope = builder.encrypt(card, public_key_b64)

        assert json.loads(jwe.decrypt(envelope, private_key_pem))["holderName"] == "Zoë Ångström"

    def test_wrong_private_key_cannot_decrypt(
        self, builder, card, public_key_b64, vault_private_key
    ):
        envelope = builder.encrypt(card, public_key_b64)
        other_pem = vault_private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

        with pytest.raises(JWEError):
            jwe.decrypt(envelope, other_pem)

    def test_bad_key_raises_key_format_error(self, builder, card, ec_public_key_b64):
        with pytest.raises(KeyFormatError):
            builder.encrypt(card, ec_public_key_b64)

    def test_jose_failure_raises_encryption_error(self, builder, card, public_key_b64):
        """Test that failures in the JOSE layer are wrapped with their cause."""
        cause = JWEError("wrap failed")

        with patch.object(encryption.jwe, "encrypt", side_effect=cause):
            with pytest.raises(EncryptionError, match="Failed to encrypt card data") as exc_info:
                builder.encrypt(card, public_key_b64)

        assert exc_info.value.__cause__ is cause
        assert not isinstance(exc_info.value, KeyFormatError)

    def test_encrypt_card_helper(self, card, public_key_b64, private_key_pem):
        envelope = encrypt_card(card, public_key_b64)

        assert json.loads(jwe.decrypt(envelope, private_key_pem))["cardNumber"] == card.card_number
