"""Questionnaire input validation."""
import logging
import numbers
from typing import Sequence, Tuple

from .config import RESPONSE_COUNT, SUBSCALES
from .errors import InvalidInputError

logger = logging.getLogger(__name__)


def validate_responses(
    responses: Sequence[int],
    strict_ranges: bool = True,
) -> Tuple[int, ...]:
    """Validate a questionnaire submission.

    Args:
        responses: The 25 answers in questionnaire order
        strict_ranges: Also check each answer against its subscale's
            Likert range

    Returns:
        The answers as an immutable tuple of ints

    Raises:
        InvalidInputError: On a missing submission, wrong answer count,
            non-integer answer or out-of-range answer
    """
    if responses is None:
        raise InvalidInputError("Responses cannot be null")
    if isinstance(responses, (str, bytes, dict)):
        raise InvalidInputError("Responses must be a sequence of integers")

    try:
        answers = list(responses)
    except TypeError:
        logger.warning(
            "RESPONSES_INVALID",
            extra={"reason": "not_a_sequence", "input_type": type(responses).__name__}
        )
        raise InvalidInputError("Responses must be a sequence of integers") from None

    if len(answers) != RESPONSE_COUNT:
        logger.warning(
            "RESPONSES_INVALID",
            extra={"reason": "wrong_count", "observed_count": len(answers)}
        )
        raise InvalidInputError(
            f"Expected {RESPONSE_COUNT} responses, got {len(answers)}",
            observed_count=len(answers),
        )

    for index, value in enumerate(answers):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidInputError(
                f"Response {index + 1} must be an integer, got {type(value).__name__}",
                observed_count=len(answers),
            )

    validated = tuple(int(value) for value in answers)

    if strict_ranges:
        for spec in SUBSCALES:
            for index in range(spec.start, spec.stop):
                value = validated[index]
                if not spec.item_min <= value <= spec.item_max:
                    logger.warning(
                        "RESPONSES_INVALID",
                        extra={
                            "reason": "out_of_range",
                            "index": index,
                            "subscale": spec.subscale.value,
                        }
                    )
                    raise InvalidInputError(
                        f"Response {index + 1} ({spec.subscale.value}) must be "
                        f"between {spec.item_min} and {spec.item_max}, got {value}",
                        observed_count=len(validated),
                    )

    return validated
