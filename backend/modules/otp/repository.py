"""
Signup code repository.

The ``otp_codes`` table is keyed by email, so there is at most one row per
email and re-initiation is a single upsert. Rows older than the TTL are
invisible to lookups and removed by ``purge_expired``.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from supabase import Client

from shared.repository import BaseRepository

from .models import OtpRecord


class OtpRepository(BaseRepository[OtpRecord]):
    """Repository for pending signup codes."""

    TABLE = "otp_codes"

    def __init__(self, db: Client, ttl_seconds: int) -> None:
        super().__init__(db)
        self._ttl = timedelta(seconds=ttl_seconds)

    def replace(self, email: str, code: str) -> OtpRecord:
        """
        Store a new code for an email, overwriting any previous one.

        The overwrite is a single upsert on the email key, so concurrent
        initiations converge to the last write.
        """
        data = {
            "email": email,
            "code": code,
            "created_at": self._now_iso(),
        }
        result = (
            self._db.table(self.TABLE)
            .upsert(data, on_conflict="email")
            .execute()
        )
        return self._map_to_record(result.data[0])

    def find_active(self, email: str, code: str) -> Optional[OtpRecord]:
        """Return the matching record if it exists and is within the TTL."""
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("email", email)
            .eq("code", code)
            .gte("created_at", self._cutoff().isoformat())
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def delete_for_email(self, email: str) -> None:
        self._db.table(self.TABLE).delete().eq("email", email).execute()

    def purge_expired(self) -> int:
        """Delete records past the TTL. Returns the number removed."""
        result = (
            self._db.table(self.TABLE)
            .delete()
            .lt("created_at", self._cutoff().isoformat())
            .execute()
        )
        return len(result.data or [])

    def _cutoff(self) -> datetime:
        return datetime.now(timezone.utc) - self._ttl

    def _map_to_record(self, data: dict[str, Any]) -> OtpRecord:
        return OtpRecord(
            email=data["email"],
            code=str(data["code"]),
            created_at=data["created_at"],
        )
