from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from bookwise.models.book import Book
from bookwise.models.user import VerificationStatus
from bookwise.repositories.book_repo import BookRepo
from bookwise.repositories.borrow_record_repo import BorrowRecordRepo
from bookwise.repositories.unit_of_work import store_guard

BOOK_NOT_FOUND = "BOOK_NOT_FOUND"
NOT_BORROWED = "NOT_BORROWED"
VERIFICATION_REQUIRED = "VERIFICATION_REQUIRED"

REASON_MESSAGES = {
    BOOK_NOT_FOUND: "Book not found",
    NOT_BORROWED: "You haven't borrowed this book",
    VERIFICATION_REQUIRED: "Complete student verification to read this book",
}


@dataclass
class AccessDecision:
    granted: bool
    reason: str | None = None
    book: Book | None = None

    @property
    def message(self) -> str | None:
        return REASON_MESSAGES.get(self.reason)


class ReadAccessService:
    @staticmethod
    def check_read_access(user_id: int, book_id: int) -> AccessDecision:
        """
        Kitabın içeriği ancak aktif bir ödünç kaydı varsa ve o kaydın
        ödünç anındaki doğrulama durumu VERIFIED ise açılır.
        Kullanıcının güncel durumuna bakılmaz.
        """
        with store_guard("read_access"):
            book = BookRepo.get(book_id)
            if not book:
                return AccessDecision(granted=False, reason=BOOK_NOT_FOUND)

            record = BorrowRecordRepo.get_active(user_id, book_id)

        if not record:
            return AccessDecision(granted=False, reason=NOT_BORROWED)

        if record.verification_status != VerificationStatus.VERIFIED:
            current_app.logger.info(
                f"[read_access] user={user_id} book={book_id} denied: snapshot={record.verification_status}"
            )
            return AccessDecision(granted=False, reason=VERIFICATION_REQUIRED)

        return AccessDecision(granted=True, book=book)
