"""Supabase-backed key-value storage."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from cal_ai.services.registry import KeyValueStorage


@dataclass
class SupabaseKeyValueStorage(KeyValueStorage):
    """Stores values in an ``app_state`` table keyed by ``key``."""

    client: Client
    table: str = "app_state"

    def get(self, key: str) -> object | None:
        """Return the stored JSON value for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: object) -> None:
        """Insert or replace the value for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()
