"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- RSA key pairs in the DER/base64 form the server hands out
- Base64 configuration payloads for tokenization and vault key sources
- Sample card data and response bodies
"""

import base64
import json
import uuid

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from payrails_cse.models.card import Card

TOKENIZE_URL = "https://api.staging.payrails.io/payment/tokenize"
TOKENIZATION_ID = "6f1c3a52-8a0e-4d5e-9c55-1a2b3c4d5e6f"


def _spki_b64(public_key) -> str:
    der = public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(der).decode("ascii")


def encode_payload(document: dict) -> str:
    """Base64-encode a configuration document the way the server does."""
    return base64.b64encode(json.dumps(document).encode("utf-8")).decode("ascii")


@pytest.fixture(scope="session")
def rsa_private_key():
    """2048-bit RSA key pair shared across the test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key) -> bytes:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def public_key_b64(rsa_private_key) -> str:
    """Base64 SubjectPublicKeyInfo DER of the session key."""
    return _spki_b64(rsa_private_key.public_key())


@pytest.fixture(scope="session")
def vault_private_key():
    """Separate RSA key pair for vault configurations."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def vault_public_key_b64(vault_private_key) -> str:
    return _spki_b64(vault_private_key.public_key())


@pytest.fixture(scope="session")
def small_rsa_public_key_b64() -> str:
    """1024-bit RSA public key (wrong size)."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=1024)
    return _spki_b64(key.public_key())


@pytest.fixture(scope="session")
def ec_public_key_b64() -> str:
    """P-256 public key (wrong type)."""
    key = ec.generate_private_key(ec.SECP256R1())
    return _spki_b64(key.public_key())


@pytest.fixture
def tokenization_document(public_key_b64) -> dict:
    """Configuration document with a tokenization key source."""
    return {
        "token": "test-bearer-token",
        "holderReference": "holder-ref-123",
        "tokenization": {
            "id": TOKENIZATION_ID,
            "publicKey": public_key_b64,
            "links": {"tokenize": {"method": "POST", "href": TOKENIZE_URL}},
            "vaultProviderConfigId": "vault-provider-1",
        },
    }


@pytest.fixture
def vault_document(vault_public_key_b64) -> dict:
    """Configuration document with only a vault key source."""
    return {
        "token": "test-bearer-token",
        "holderReference": "holder-ref-123",
        "vaultConfiguration": {
            "encryptionPublicKey": vault_public_key_b64,
            "providerConfigId": "provider-config-9",
        },
    }


@pytest.fixture
def tokenization_payload(tokenization_document) -> str:
    return encode_payload(tokenization_document)


@pytest.fixture
def vault_payload(vault_document) -> str:
    return encode_payload(vault_document)


@pytest.fixture
def card() -> Card:
    """Full card with all optional fields."""
    return Card(
        card_number="4111111111111111",
        expiry_month="03",
        expiry_year="2030",
        holder_name="John Doe",
        security_code="737",
    )


@pytest.fixture
def minimal_card() -> Card:
    """Card with only the required fields."""
    return Card(card_number="5555555555554444", expiry_month="12", expiry_year="2031")


@pytest.fixture
def instrument_body() -> dict:
    """201 response body for a created card instrument."""
    return {
        "id": str(uuid.UUID("0b9e7c1e-2f3a-4b5c-8d9e-0f1a2b3c4d5e")),
        "createdAt": "2024-05-01T12:00:00.000Z",
        "holderId": str(uuid.UUID("9a8b7c6d-5e4f-4a3b-9c2d-1e0f9a8b7c6d")),
        "holderReference": "holder-ref-123",
        "paymentMethod": "card",
        "status": "created",
        "description": "Visa ending 1111",
        "data": {
            "bin": "411111",
            "holderName": "John Doe",
            "scheme": "VISA",
            "suffix": "1111",
            "expiryMonth": "03",
            "expiryYear": "2030",
        },
        "providerData": "psp-reference-42",
        "futureUsage": "cardOnFile",
        "fingerprint": "fp_abc123",
    }


@pytest.fixture
def error_list_body() -> dict:
    """422 response body with two structured errors."""
    return {
        "errors": [
            {
                "id": "11111111-2222-4333-8444-555555555555",
                "title": "Unprocessable Entity",
                "detail": "encryptedInstrumentDetails could not be decrypted",
                "meta": 42,
            },
            {
                "id": "66666666-7777-4888-9999-000000000000",
                "title": "Validation Failed",
                "detail": "expiryYear is in the past",
            },
        ]
    }


@pytest.fixture
def make_payload():
    """Factory that base64-encodes an arbitrary configuration document."""
    return encode_payload
