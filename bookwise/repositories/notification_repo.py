from sqlalchemy import select

from bookwise.extensions import db
from bookwise.models.notification_log import NotificationLog


class NotificationRepo:
    @staticmethod
    def already_sent(borrow_record_id: int, notif_type: str) -> bool:
        return db.session.scalars(
            select(NotificationLog.id).where(
                NotificationLog.borrow_record_id == borrow_record_id,
                NotificationLog.type == notif_type,
                NotificationLog.success.is_(True),
            )
        ).first() is not None

    @staticmethod
    def log(entry: NotificationLog):
        db.session.add(entry)
        return entry
