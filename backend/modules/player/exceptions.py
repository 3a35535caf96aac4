"""
Player module exceptions.
"""

from shared.exceptions import BusinessRuleError, NotFoundError


class PlayerStateError(BusinessRuleError):
    """Raised when an event is not valid in the current playback state."""

    def __init__(self, event: str, state: str):
        super().__init__(
            f"Cannot {event} while {state}",
            code="INVALID_PLAYER_STATE",
            details={"event": event, "state": state},
        )


class LessonNotFoundError(NotFoundError):
    """Raised when a playlist index is out of range."""

    def __init__(self, index: int, size: int):
        super().__init__(
            f"No lesson at position {index}",
            code="LESSON_NOT_FOUND",
            details={"index": index, "size": size},
        )
