"""
Session persistence to Supabase.
"""
import asyncio
import logging
from typing import Optional

from supabase import create_client, Client

from .config import StorageSecrets
from .errors import StorageError
from .types import SessionRecord

logger = logging.getLogger(__name__)

DEFAULT_TABLE = 'detection_sessions'


class SupabaseSessionRecorder:
    """
    Writes one row per completed session into the detection_sessions table.
    """

    def __init__(self, secrets: StorageSecrets, table: str = DEFAULT_TABLE, client: Optional[Client] = None):
        """Initialize Supabase connection for session records

        Args:
            secrets: Store URL and anon key
            table: Destination table name
            client: Pre-built client. If None, one is created from secrets
        """
        self.table_name = table
        self.supabase: Client = client if client is not None else create_client(secrets.url, secrets.anon_key)
        logger.info(f"✅ Connected to Supabase: {secrets.url}")

    def _insert(self, row: dict) -> None:
        try:
            self.supabase.table(self.table_name).insert(row).execute()
        except Exception as e:
            raise StorageError(f"Error saving session: {e}") from e

    async def save(self, record: SessionRecord) -> None:
        """
        Insert a session row without blocking the event loop.

        Raises:
            StorageError: if the insert fails
        """
        await asyncio.to_thread(self._insert, record.to_row())
        logger.info(f"💾 Saved session (score={record.depression_score}, "
                    f"duration={record.session_duration}s)")
