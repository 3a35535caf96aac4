"""
Ledger repository for database access.

Progress and entitlements are rows with unique constraints, so recording
the same fact twice is a no-op at the database.
"""

from collections import defaultdict

from shared.repository import BaseRepository

from .models import Entitlements, ItemType


class LedgerRepository(BaseRepository[Entitlements]):
    """Repository for course progress and purchases."""

    PROGRESS = "course_progress"
    ENTITLEMENTS = "entitlements"

    def add_progress(self, account_id: str, course_id: str, video_id: str) -> None:
        data = {
            "account_id": account_id,
            "course_id": course_id,
            "video_id": video_id,
            "completed_at": self._now_iso(),
        }
        (
            self._db.table(self.PROGRESS)
            .upsert(
                data,
                on_conflict="account_id,course_id,video_id",
                ignore_duplicates=True,
            )
            .execute()
        )

    def get_progress(self, account_id: str) -> dict[str, list[str]]:
        result = (
            self._db.table(self.PROGRESS)
            .select("course_id, video_id")
            .eq("account_id", account_id)
            .order("completed_at")
            .execute()
        )
        progress: dict[str, list[str]] = defaultdict(list)
        for row in result.data:
            videos = progress[row["course_id"]]
            if row["video_id"] not in videos:
                videos.append(row["video_id"])
        return dict(progress)

    def add_entitlement(self, account_id: str, item_type: ItemType, item_id: str) -> None:
        data = {
            "account_id": account_id,
            "item_type": item_type.value,
            "item_id": item_id,
            "granted_at": self._now_iso(),
        }
        (
            self._db.table(self.ENTITLEMENTS)
            .upsert(
                data,
                on_conflict="account_id,item_type,item_id",
                ignore_duplicates=True,
            )
            .execute()
        )

    def get_entitlements(self, account_id: str) -> Entitlements:
        result = (
            self._db.table(self.ENTITLEMENTS)
            .select("item_type, item_id")
            .eq("account_id", account_id)
            .order("granted_at")
            .execute()
        )
        entitlements = Entitlements()
        for row in result.data:
            target = (
                entitlements.course_ids
                if row["item_type"] == ItemType.COURSE.value
                else entitlements.note_ids
            )
            if row["item_id"] not in target:
                target.append(row["item_id"])
        return entitlements
