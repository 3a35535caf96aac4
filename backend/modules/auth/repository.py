"""
Account repository for database access.

Encapsulates Supabase queries for the ``accounts`` table. Emails are
stored lower-cased and carry a unique constraint.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from shared.models import Role

from .models import Account


class AccountRepository(BaseRepository[Account]):
    """
    Repository for account records.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for that.
    """

    TABLE = "accounts"

    def get_by_id(self, account_id: str) -> Optional[Account]:
        result = self._db.table(self.TABLE).select("*").eq("id", account_id).execute()
        if not result.data:
            return None
        return self._map_to_account(result.data[0])

    def get_by_email(self, email: str) -> Optional[Account]:
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("email", email.lower())
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_account(result.data[0])

    def exists(self, email: str) -> bool:
        result = (
            self._db.table(self.TABLE)
            .select("id")
            .eq("email", email.lower())
            .limit(1)
            .execute()
        )
        return bool(result.data)

    def get_credentials(self, email: str) -> Optional[tuple[Account, str]]:
        """
        Load an account together with its password hash.

        Only the login path should call this.
        """
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("email", email.lower())
            .execute()
        )
        if not result.data:
            return None
        row = result.data[0]
        return self._map_to_account(row), row.get("password_hash") or ""

    def create(self, data: dict[str, Any]) -> Account:
        """
        Insert a new account.

        Args:
            data: Column values including ``email`` and ``password_hash``.

        Returns:
            The created Account with generated ID and timestamps.
        """
        payload = dict(data)
        payload["email"] = payload["email"].lower()
        result = self._db.table(self.TABLE).insert(payload).execute()
        return self._map_to_account(result.data[0])

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_account(self, data: dict[str, Any]) -> Account:
        """Map database row to Account model."""
        return Account(
            id=str(data["id"]),
            email=data["email"],
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            role=Role(data.get("role") or Role.STUDENT.value),
            branch=data.get("branch"),
            year=data.get("year"),
            college=data.get("college"),
            created_at=data.get("created_at"),
        )
