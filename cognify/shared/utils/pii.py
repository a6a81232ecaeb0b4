"""Respondent identifier hashing.

Questionnaire answers and respondent identifiers are health data. Logs carry
only a salted hash of the identifier and never the answers themselves.
"""
import hashlib
import logging
from typing import Optional

logger = logging.getLogger(__name__)

MIN_SALT_LENGTH = 32


class RespondentHasher:
    """Maps respondent ids to stable, non-reversible log keys.

    One hasher is built per service from its configured salt, so two
    deployments with different salts never produce correlatable hashes.
    """

    def __init__(self, salt: str):
        """Initialize hasher.

        Args:
            salt: Secret salt, at least 32 characters

        Raises:
            ValueError: If salt is empty or too short
        """
        if not salt or len(salt) < MIN_SALT_LENGTH:
            logger.critical(
                "RESPONDENT_HASHER_SALT_REJECTED",
                extra={"min_length": MIN_SALT_LENGTH}
            )
            raise ValueError(f"Respondent salt must be at least {MIN_SALT_LENGTH} characters")
        self._salt = salt.encode()

    def digest(self, respondent_id: Optional[str]) -> Optional[str]:
        """Return the hex digest for a respondent id.

        Anonymous submissions (None or empty) have no digest.
        """
        if not respondent_id:
            return None
        return hashlib.sha256(self._salt + str(respondent_id).encode()).hexdigest()
