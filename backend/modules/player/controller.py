"""
Course player state machine.

The controller owns playback state for one course in one sitting and knows
nothing about the browser: a view forwards media element events to it and
renders from ``snapshot()``. Buffering is tracked separately from the
play/pause state because a stall can happen in either.

    IDLE -> LOADING -> READY <-> PLAYING <-> PAUSED -> ENDED
"""

import logging
from typing import Optional
from urllib.parse import quote, urlencode

from modules.catalog.models import Course, Resource, Video
from modules.media.signer import is_external_url

from .exceptions import LessonNotFoundError, PlayerStateError
from .models import (
    SEEK_STEP_SECONDS,
    PlaybackState,
    PlayerSnapshot,
    ProgressReporter,
    ResourceSigner,
)

logger = logging.getLogger(__name__)


class PlayerController:
    def __init__(
        self,
        course: Course,
        api_url: str,
        token: str,
        progress_reporter: ProgressReporter,
        signer: ResourceSigner,
        completed: Optional[list[str]] = None,
    ):
        self._course = course
        self._playlist = course.all_videos()
        self._api_url = api_url.rstrip("/")
        self._token = token
        self._report_progress = progress_reporter
        self._sign = signer

        self._reported: set[str] = set(completed or [])
        self._index = 0
        self._state = PlaybackState.IDLE
        self._buffering = False
        self._autoplay = False
        self._media_url: Optional[str] = None

        self._current_time = 0.0
        self._duration = 0.0
        self._progress = 0.0

        self._volume = 1.0
        self._last_volume = 1.0
        self._preferred_speed = 1.0
        self._speed = 1.0

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def buffering(self) -> bool:
        return self._buffering

    @property
    def index(self) -> int:
        return self._index

    @property
    def current_video(self) -> Optional[Video]:
        if not self._playlist:
            return None
        return self._playlist[self._index]

    @property
    def media_url(self) -> Optional[str]:
        return self._media_url

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def duration(self) -> float:
        return self._duration

    def is_completed(self, video_id: str) -> bool:
        return video_id in self._reported

    def course_completion(self) -> int:
        """Percentage of lessons in the course that have been completed."""
        if not self._playlist:
            return 0
        done = sum(1 for video in self._playlist if video.id in self._reported)
        return round(done * 100 / len(self._playlist))

    def snapshot(self) -> PlayerSnapshot:
        video = self.current_video
        return PlayerSnapshot(
            state=self._state,
            buffering=self._buffering,
            index=self._index,
            video_id=video.id if video else None,
            media_url=self._media_url,
            current_time=self._current_time,
            duration=self._duration,
            progress=self._progress,
            volume=self._volume,
            speed=self._speed,
            completed=bool(video and video.id in self._reported),
        )

    # -------------------------------------------------------------------------
    # URL resolution
    # -------------------------------------------------------------------------

    def resolve_media_url(self, video: Video) -> Optional[str]:
        """
        Playable URL for a lesson.

        External URLs are used as they are. Storage keys go through the
        streaming proxy with the session token in the query string, since a
        media element cannot send an Authorization header.
        """
        ref = video.video_url
        if not ref:
            return None
        if is_external_url(ref):
            return ref
        query = urlencode({"key": ref, "token": self._token}, quote_via=quote)
        return f"{self._api_url}/stream?{query}"

    async def open_resource(self, resource: Resource) -> Optional[str]:
        """Sign a lesson document at the moment it is opened."""
        if is_external_url(resource.url):
            return resource.url
        return await self._sign(resource.url)

    # -------------------------------------------------------------------------
    # Lesson lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> Optional[str]:
        """Start loading the active lesson and return its media URL."""
        video = self.current_video
        if video is None:
            raise LessonNotFoundError(self._index, 0)

        self._reset_transient()
        self._media_url = self.resolve_media_url(video)
        self._state = PlaybackState.LOADING
        # An external URL gives no proxy round-trip to wait on.
        self._buffering = not is_external_url(video.video_url)
        return self._media_url

    def media_ready(self) -> None:
        if self._state != PlaybackState.LOADING:
            return
        self._buffering = False
        self._speed = self._preferred_speed
        if self._autoplay:
            self._autoplay = False
            self._state = PlaybackState.PLAYING
        else:
            self._state = PlaybackState.READY

    def play(self) -> None:
        if self._state == PlaybackState.IDLE:
            raise PlayerStateError("play", self._state.value)
        if self._state == PlaybackState.LOADING:
            self._autoplay = True
            return
        if self._state == PlaybackState.ENDED:
            self._current_time = 0.0
            self._progress = 0.0
        self._state = PlaybackState.PLAYING

    def pause(self) -> None:
        if self._state == PlaybackState.PLAYING:
            self._state = PlaybackState.PAUSED
        elif self._state == PlaybackState.LOADING:
            self._autoplay = False

    def toggle(self) -> None:
        if self._state == PlaybackState.PLAYING:
            self.pause()
        else:
            self.play()

    def stalled(self) -> None:
        self._buffering = True

    def resumed(self) -> None:
        self._buffering = False

    def time_update(self, current: float, duration: float) -> None:
        self._current_time = max(0.0, current)
        self._duration = duration if duration and duration > 0 else 0.0
        if self._duration:
            self._progress = min(100.0, self._current_time / self._duration * 100)
        else:
            self._progress = 0.0

    def seek(self, delta: float = SEEK_STEP_SECONDS) -> float:
        """Move the playhead by ``delta`` seconds, clamped to the lesson."""
        target = max(0.0, self._current_time + delta)
        if self._duration:
            target = min(target, self._duration)
        self.time_update(target, self._duration)
        return target

    async def ended(self) -> None:
        """Mark the lesson finished and report completion the first time."""
        video = self.current_video
        if video is None:
            return
        self._state = PlaybackState.ENDED
        self._buffering = False
        if self._duration:
            self._current_time = self._duration
            self._progress = 100.0

        if video.id in self._reported:
            return
        await self._report_progress(self._course.id, video.id)
        self._reported.add(video.id)
        logger.debug("Reported completion of %s/%s", self._course.id, video.id)

    # -------------------------------------------------------------------------
    # Playlist
    # -------------------------------------------------------------------------

    def select(self, index: int) -> Optional[str]:
        if not 0 <= index < len(self._playlist):
            raise LessonNotFoundError(index, len(self._playlist))
        self._index = index
        return self.load()

    def next(self) -> Optional[str]:
        """Advance to the next lesson. Returns None on the last lesson."""
        if self._index + 1 >= len(self._playlist):
            return None
        return self.select(self._index + 1)

    def previous(self) -> Optional[str]:
        if self._index == 0:
            return None
        return self.select(self._index - 1)

    # -------------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------------

    def set_volume(self, volume: float) -> None:
        self._volume = min(1.0, max(0.0, volume))
        if self._volume > 0:
            self._last_volume = self._volume

    def toggle_mute(self) -> None:
        if self._volume > 0:
            self._last_volume = self._volume
            self._volume = 0.0
        else:
            self._volume = self._last_volume or 1.0

    def set_speed(self, rate: float) -> None:
        if rate <= 0:
            raise ValueError("Playback rate must be positive")
        self._preferred_speed = rate
        self._speed = rate

    def _reset_transient(self) -> None:
        self._current_time = 0.0
        self._duration = 0.0
        self._progress = 0.0
        self._buffering = False
        self._autoplay = False
        self._speed = 1.0
