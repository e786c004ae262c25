from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .notifier import Notifier


class MySQLNotifier(Notifier):
    """Stores notifications for the (external) delivery layer to pick up."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def notify(
        self,
        *,
        recipient_id: int,
        title: str,
        message: str,
        type: str,
        sender_id: Optional[int] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(recipient_id, sender_id, title, message, type)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(recipient_id), sender_id, title, message, type),
            )
