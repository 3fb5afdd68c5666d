"""Decision enum for compliance evaluation."""

from enum import Enum


class Decision(str, Enum):
    """Outcome of a compliance evaluation.

    GRANT: the app may process the user's data.
    DENY: it may not (also the outcome of any failure).
    """

    GRANT = "grant"
    DENY = "deny"

    @classmethod
    def from_bool(cls, accepted: bool) -> "Decision":
        """Map an accepted flag to GRANT/DENY."""
        return cls.GRANT if accepted else cls.DENY
