"""
Player module models.
"""

from enum import Enum
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, ConfigDict

ProgressReporter = Callable[[str, str], Awaitable[None]]
ResourceSigner = Callable[[str], Awaitable[Optional[str]]]

SEEK_STEP_SECONDS = 5.0


class PlaybackState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    ENDED = "ended"


class PlayerSnapshot(BaseModel):
    """What a view needs to render the player at one instant."""

    model_config = ConfigDict(frozen=True)

    state: PlaybackState
    buffering: bool
    index: int
    video_id: Optional[str]
    media_url: Optional[str]
    current_time: float
    duration: float
    progress: float
    volume: float
    speed: float
    completed: bool
