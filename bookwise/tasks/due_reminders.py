# bookwise/tasks/due_reminders.py
from contextlib import nullcontext

from flask import current_app, has_app_context

from bookwise.extensions import db
from bookwise.repositories.borrow_record_repo import BorrowRecordRepo
from bookwise.repositories.notification_repo import NotificationRepo
from bookwise.services import status_service
from bookwise.services.mail_service import DUE_SOON, OVERDUE, MailService
from bookwise.utils.clock import utcnow


def _context_for(app):
    # zaten bu app'in context'indeysek (HTTP tetiklemesi) aynı session'ı kullan
    if has_app_context() and current_app._get_current_object() is app:
        return nullcontext()
    return app.app_context()


def run_due_reminder_job(app, now=None) -> dict:
    """
    Aktif ödünçleri tarar:
    - overdue: status katmanı 'overdue' diyorsa
    - due_soon: DUE_SOON_DAYS içinde teslim edilecekse
    Her (kayıt, tip) için en fazla bir başarılı mail. Kayıtlara / stoklara dokunmaz.
    """
    with _context_for(app):
        now = now or utcnow()
        within_days = app.config.get("DUE_SOON_DAYS", 1)
        counts = {"checked": 0, OVERDUE: 0, DUE_SOON: 0, "failed": 0}

        try:
            for record in BorrowRecordRepo.list_active():
                counts["checked"] += 1
                display = status_service.describe(record, now)

                if display.status == status_service.DISPLAY_OVERDUE:
                    notif_type = OVERDUE
                elif status_service.is_due_soon(record, now, within_days):
                    notif_type = DUE_SOON
                else:
                    continue

                if NotificationRepo.already_sent(record.id, notif_type):
                    continue

                if MailService.send_reminder(record, notif_type):
                    counts[notif_type] += 1
                else:
                    counts["failed"] += 1

            # tek commit
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            app.logger.exception(f"[due_reminders] error: {e}")
            raise

        app.logger.info(
            f"[due_reminders] checked={counts['checked']} overdue={counts[OVERDUE]} "
            f"due_soon={counts[DUE_SOON]} failed={counts['failed']}"
        )
        return counts
