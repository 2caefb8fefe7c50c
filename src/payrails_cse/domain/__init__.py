"""Configuration, envelope and response handling."""

from payrails_cse.domain.classifier import ResponseClassifier, classify
from payrails_cse.domain.config_resolver import ConfigResolver
from payrails_cse.domain.encryption import EnvelopeBuilder, encrypt_card, load_public_key

__all__ = [
    "ConfigResolver",
    "EnvelopeBuilder",
    "ResponseClassifier",
    "classify",
    "encrypt_card",
    "load_public_key",
]
