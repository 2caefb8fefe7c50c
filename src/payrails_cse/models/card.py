"""Card input and tokenization policy models."""

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class FutureUsage(str, Enum):
    """
    How the tokenized instrument will be used in future payments.

    The canonical wire spelling is lower camelCase. Older configuration
    revisions used `Subscription`, `CardOnFile` and `UnscheduledCardOnFile`;
    those are only accepted through `parse()`.
    """

    RECURRING = "recurring"
    CARD_ON_FILE = "cardOnFile"
    UNSCHEDULED_CARD_ON_FILE = "unscheduledCardOnFile"

    @classmethod
    def parse(cls, value: "str | FutureUsage") -> "FutureUsage":
        """Parse a canonical or legacy spelling into a FutureUsage member.

        Args:
            value: Canonical value, legacy value, or a FutureUsage member

        Returns:
            FutureUsage member

        Raises:
            ValueError: If the value is not a known spelling
        """
        if isinstance(value, cls):
            return value
        legacy = _LEGACY_FUTURE_USAGE.get(value)
        if legacy is not None:
            return legacy
        return cls(value)


_LEGACY_FUTURE_USAGE = {
    "Subscription": FutureUsage.RECURRING,
    "CardOnFile": FutureUsage.CARD_ON_FILE,
    "UnscheduledCardOnFile": FutureUsage.UNSCHEDULED_CARD_ON_FILE,
}


def _mask(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return "*" * len(value)


@dataclass(frozen=True)
class Card:
    """Raw card fields supplied by the caller (highly sensitive - PCI scope).

    Instances are transient: they are encrypted once and dropped. The
    repr masks the card number and security code so a stray log line
    never leaks them.

    Attributes:
        card_number: Full card number (PAN), not validated here
        expiry_month: Expiration month as entered (e.g., "03")
        expiry_year: Expiration year as entered (e.g., "2030")
        holder_name: Optional name on the card
        security_code: Optional CVV/CVC
        holder_reference: Holder reference bound by the tokenization client
    """

    card_number: str
    expiry_month: str
    expiry_year: str
    holder_name: Optional[str] = None
    security_code: Optional[str] = None
    holder_reference: Optional[str] = None

    def __repr__(self) -> str:
        suffix = self.card_number[-4:] if self.card_number else ""
        return (
            f"Card(card_number='****{suffix}', expiry_month={self.expiry_month!r}, "
            f"expiry_year={self.expiry_year!r}, holder_name={self.holder_name!r}, "
            f"security_code={_mask(self.security_code)!r}, "
            f"holder_reference={self.holder_reference!r})"
        )

    def with_holder_reference(self, holder_reference: str) -> "Card":
        """Return a copy bound to the given holder reference."""
        return replace(self, holder_reference=holder_reference)

    def to_dict(self) -> dict[str, str]:
        """Convert to the wire dictionary.

        Keys are camelCase in a fixed order and only present when the
        field is set. The server treats a missing key differently from
        a null one.

        Returns:
            Dictionary with non-None values
        """
        pairs = (
            ("holderReference", self.holder_reference),
            ("cardNumber", self.card_number),
            ("expiryMonth", self.expiry_month),
            ("expiryYear", self.expiry_year),
            ("holderName", self.holder_name),
            ("securityCode", self.security_code),
        )
        return {key: value for key, value in pairs if value is not None}

    def to_json_bytes(self) -> bytes:
        """Serialize to canonical compact JSON for encryption."""
        return json.dumps(
            self.to_dict(), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")
