"""Tokenization response models: instruments and error lists."""

from enum import Enum
from typing import Optional
from uuid import UUID

from payrails_cse.models.base import WireModel
from payrails_cse.models.values import Scalar


class InstrumentStatus(str, Enum):
    """Lifecycle status of a stored instrument."""

    CREATED = "created"
    ENABLED = "enabled"
    DISABLED = "disabled"
    DELETED = "deleted"
    INVALID = "invalid"
    TRANSIENT = "transient"


class PaymentMethodType(str, Enum):
    """Payment method an instrument represents."""

    CARD = "card"
    APPLE_PAY = "applePay"
    GOOGLE_PAY = "googlePay"
    KLARNA = "klarna"
    KLARNA_PAYNOW = "klarna_paynow"
    KLARNA_ACCOUNT = "klarna_account"
    PAYPAL = "payPal"
    UNDETERMINED = "undetermined"


class InstrumentData(WireModel):
    """Masked card summary. Never contains the full card number."""

    bin: Optional[str] = None
    holder_name: Optional[str] = None
    scheme: Optional[str] = None
    suffix: Optional[str] = None
    expiry_month: Optional[str] = None
    expiry_year: Optional[str] = None
    payment_token: Optional[str] = None
    email: Optional[str] = None
    network: Optional[str] = None


class Instrument(WireModel):
    """Tokenized payment instrument returned with a 201 response."""

    id: UUID
    created_at: str
    holder_id: UUID
    holder_reference: Optional[str] = None
    payment_method: PaymentMethodType
    status: InstrumentStatus
    description: Optional[str] = None
    data: InstrumentData
    provider_data: Optional[Scalar] = None
    future_usage: Optional[str] = None
    fingerprint: Optional[str] = None


class PayrailsError(WireModel):
    """A single structured error from the tokenization API."""

    id: UUID
    title: str
    detail: str
    meta: Optional[Scalar] = None


class PayrailsErrorList(WireModel):
    """Error envelope returned with any non-201 response that has a body."""

    errors: list[PayrailsError]
