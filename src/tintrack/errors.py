"""Exception classes for tintrack.

Every exception here signals a contract violation by the caller (bad
coordinates, non-monotonic versions, malformed payloads). Version skew
between edits and classification results is normal and never raises.
"""

from __future__ import annotations


class TintrackError(Exception):
    """Base exception for all tintrack errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidRangeError(TintrackError, ValueError):
    """A position or range with impossible coordinates.

    Raised for negative coordinates or a start that lies after its end.
    """

    pass


class InvalidChangeError(TintrackError, ValueError):
    """A text change that cannot be applied.

    Raised when the removed region of a change is inverted.
    """

    pass


class VersionOrderError(TintrackError):
    """An edit was recorded out of version order.

    Edit versions must increase strictly; anything else is a producer bug,
    distinct from the ordinary lag of a classification pass.
    """

    def __init__(self, version: int, latest: int) -> None:
        """Initialize version order error.

        Args:
            version: The rejected version
            latest: The highest version already recorded
        """
        self.version = version
        self.latest = latest
        super().__init__(
            f"edit version {version} is not greater than last recorded version {latest}"
        )


class PayloadError(TintrackError):
    """Error decoding an event payload.

    Raised when an edit or classification payload is missing fields or
    carries values of the wrong shape.
    """

    def __init__(self, kind: str, message: str) -> None:
        """Initialize payload error.

        Args:
            kind: Payload kind being decoded (e.g., "edit", "range")
            message: Description of the problem
        """
        self.kind = kind
        super().__init__(f"Malformed {kind} payload: {message}")


class QueueClosedError(TintrackError):
    """A task was submitted to a closed serial task queue."""

    pass
