# bookwise/services/mail_service.py
from __future__ import annotations

from flask import current_app
from flask_mail import Message

from bookwise.extensions import mail
from bookwise.models.notification_log import NotificationLog
from bookwise.repositories.notification_repo import NotificationRepo
from bookwise.utils.clock import utcnow

OVERDUE = "overdue"
DUE_SOON = "due_soon"

TEMPLATES = {
    OVERDUE: (
        "BookWise: Overdue book",
        "Hello {name},\n\n"
        "The due date for '{title}' has passed.\n"
        "Due date: {due}\n\n"
        "Please return it as soon as possible.\n",
    ),
    DUE_SOON: (
        "BookWise: Book due soon",
        "Hello {name},\n\n"
        "'{title}' is due soon.\n"
        "Due date: {due}\n\n"
        "Don't forget to return it.\n",
    ),
}


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[MailService] mail could not be sent: {e}")
            return False, str(e)

    @staticmethod
    def log_notification(
        borrow_record_id: int,
        notif_type: str,
        to_email: str | None,
        message: str,
        success: bool,
        error: str | None = None,
    ) -> NotificationLog:
        # commit yok: job sonunda tek commit
        return NotificationRepo.log(NotificationLog(
            borrow_record_id=borrow_record_id,
            type=notif_type,
            email=to_email,
            message=message,
            success=bool(success),
            error_message=error,
            sent_at=utcnow(),
        ))

    @staticmethod
    def send_reminder(record, notif_type: str) -> bool:
        """
        Kayıt sahibine overdue / due_soon maili yollar ve loglar.
        """
        user = record.user
        book = record.book
        to_email = user.email if user else None

        subject, template = TEMPLATES[notif_type]
        body = template.format(
            name=user.full_name if user else "reader",
            title=book.title if book else f"Book #{record.book_id}",
            due=record.due_date.date().isoformat(),
        )

        if not to_email:
            MailService.log_notification(record.id, notif_type, None, "User email not found",
                                         success=False, error="missing_email")
            return False

        ok, err = MailService.send_email(to_email, subject, body)
        MailService.log_notification(record.id, notif_type, to_email, body, success=ok, error=err)
        return ok
