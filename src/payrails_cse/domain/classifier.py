"""Map a tokenize HTTP response to a typed outcome."""

from typing import Optional

from pydantic import ValidationError

from payrails_cse.logging_config import get_logger
from payrails_cse.models.exceptions import MalformedResponseError
from payrails_cse.models.instrument import Instrument, PayrailsErrorList
from payrails_cse.models.outcome import (
    TokenizeEmpty,
    TokenizeFailure,
    TokenizeOutcome,
    TokenizeSuccess,
)

logger = get_logger(__name__)

HTTP_CREATED = 201


class ResponseClassifier:
    """
    Classifies tokenize responses.

    - no body: ``TokenizeEmpty`` carrying the status code, whatever it is
    - 201: body must decode as an ``Instrument``
    - anything else: body must decode as a ``PayrailsErrorList``

    A body that fails to decode for its status code raises
    ``MalformedResponseError``. The other schema is never tried.
    """

    def classify(self, status_code: int, body: Optional[bytes]) -> TokenizeOutcome:
        if not body:
            logger.info("tokenize_response_empty", status_code=status_code)
            return TokenizeEmpty(code=status_code)

        if status_code == HTTP_CREATED:
            try:
                instrument = Instrument.model_validate_json(body)
            except ValidationError as e:
                logger.error(
                    "tokenize_response_malformed",
                    status_code=status_code,
                    expected="instrument",
                    error_count=e.error_count(),
                )
                raise MalformedResponseError(
                    f"Failed to decode instrument from {status_code} response",
                    status_code=status_code,
                ) from e
            return TokenizeSuccess(code=status_code, instrument=instrument)

        try:
            error_list = PayrailsErrorList.model_validate_json(body)
        except ValidationError as e:
            logger.error(
                "tokenize_response_malformed",
                status_code=status_code,
                expected="error_list",
                error_count=e.error_count(),
            )
            raise MalformedResponseError(
                f"Failed to decode error list from {status_code} response",
                status_code=status_code,
            ) from e
        return TokenizeFailure(code=status_code, errors=list(error_list.errors))


def classify(status_code: int, body: Optional[bytes]) -> TokenizeOutcome:
    """Module-level shortcut for ``ResponseClassifier().classify``."""
    return ResponseClassifier().classify(status_code, body)
