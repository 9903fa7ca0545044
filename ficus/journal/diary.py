"""
Personal diary.
"""

import logging
from typing import List, Optional

from ficus.core.config import Config
from ficus.core.db import session_scope
from ficus.core.models import DiaryEntry
from ficus.core.utils import now_millis
from ficus.license.keys import normalize_system_id

logger = logging.getLogger(__name__)


def add_entry(
    config: Config,
    system_id: str,
    text: str,
    now_ms: Optional[int] = None,
) -> Optional[DiaryEntry]:
    """
    Append a diary entry.

    Blank text is ignored and returns None.
    """
    if not text or not text.strip():
        return None

    with session_scope(config) as session:
        entry = DiaryEntry(
            system_id=normalize_system_id(system_id),
            text=text,
            timestamp=now_millis() if now_ms is None else now_ms,
        )
        session.add(entry)
        session.flush()

        logger.info(f"Diary entry #{entry.id} saved")

    return entry


def list_entries(config: Config, system_id: str) -> List[DiaryEntry]:
    """Diary entries, newest first."""
    with session_scope(config) as session:
        return (
            session.query(DiaryEntry)
            .filter(DiaryEntry.system_id == normalize_system_id(system_id))
            .order_by(DiaryEntry.timestamp.desc(), DiaryEntry.id.desc())
            .all()
        )
