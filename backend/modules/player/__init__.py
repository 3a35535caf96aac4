"""
Player module.

I/O-free playback controller for a course: state transitions, stream URL
construction, on-demand document signing and one-shot completion reports.
"""

from .controller import PlayerController
from .models import PlaybackState, PlayerSnapshot
from .exceptions import PlayerStateError, LessonNotFoundError

__all__ = [
    "PlayerController",
    "PlaybackState",
    "PlayerSnapshot",
    "PlayerStateError",
    "LessonNotFoundError",
]
