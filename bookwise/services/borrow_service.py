from dataclasses import dataclass
from datetime import date, timedelta

from flask import current_app
from sqlalchemy.exc import IntegrityError

from bookwise.errors import (
    AlreadyBorrowed,
    BookNotFound,
    BookUnavailable,
    RecordNotFound,
    UserNotFound,
)
from bookwise.models.borrow_record import BorrowRecord, BorrowStatus
from bookwise.models.user import VerificationStatus
from bookwise.repositories.book_repo import BookRepo
from bookwise.repositories.borrow_record_repo import BorrowRecordRepo
from bookwise.repositories.unit_of_work import store_guard, unit_of_work
from bookwise.repositories.user_repo import UserRepo
from bookwise.utils.clock import utcnow

DEFAULT_BORROW_PERIOD_DAYS = 7


@dataclass
class BorrowOutcome:
    record: BorrowRecord
    verification_status: str


@dataclass
class ReturnOutcome:
    record: BorrowRecord
    return_date: date


def snapshot_verification(user_status: str) -> str:
    # PENDING_VERIFICATION / REJECTED ödünç için UNVERIFIED sayılır
    if user_status == VerificationStatus.VERIFIED:
        return VerificationStatus.VERIFIED
    return VerificationStatus.UNVERIFIED


class BorrowService:
    @staticmethod
    def _borrow_period() -> timedelta:
        days = current_app.config.get("BORROW_PERIOD_DAYS", DEFAULT_BORROW_PERIOD_DAYS)
        return timedelta(days=days)

    @staticmethod
    def borrow_book(user_id: int, book_id: int, now=None) -> BorrowOutcome:
        now = now or utcnow()

        with unit_of_work("borrow"):
            user = UserRepo.get_by_id(user_id)
            if not user:
                raise UserNotFound()

            book = BookRepo.get(book_id)
            if not book or book.available_copies <= 0:
                raise BookUnavailable()

            if BorrowRecordRepo.get_active(user_id, book_id):
                raise AlreadyBorrowed()

            snapshot = snapshot_verification(user.verification_status)
            record = BorrowRecord(
                user_id=user_id,
                book_id=book_id,
                borrow_date=now,
                due_date=now + BorrowService._borrow_period(),
                status=BorrowStatus.BORROWED,
                verification_status=snapshot,
            )

            try:
                BorrowRecordRepo.insert(record)
            except IntegrityError as e:
                # eşzamanlı ikinci istek partial unique index'e takıldı
                raise AlreadyBorrowed() from e

            # son kopyayı başka bir istek aldıysa 0 satır değişir
            if not BookRepo.update_copies(book_id, -1):
                raise BookUnavailable()

        current_app.logger.info(
            f"[borrow] user={user_id} book={book_id} record={record.id} snapshot={snapshot}"
        )
        return BorrowOutcome(record=record, verification_status=snapshot)

    @staticmethod
    def return_book(borrow_record_id: int, requesting_user_id: int, now=None) -> ReturnOutcome:
        now = now or utcnow()
        return_date = now.date()

        with unit_of_work("return"):
            record = BorrowRecordRepo.get(borrow_record_id, for_update=True)
            # başkasının kaydı / zaten iade edilmiş kayıt da "bulunamadı" sayılır
            if (
                not record
                or record.user_id != requesting_user_id
                or record.status != BorrowStatus.BORROWED
            ):
                raise RecordNotFound()

            changed = BorrowRecordRepo.update(
                record.id,
                {"status": BorrowStatus.RETURNED, "return_date": return_date},
                user_id=requesting_user_id,
                status=BorrowStatus.BORROWED,
            )
            if not changed:
                raise RecordNotFound()

            book = BookRepo.get(record.book_id)
            if not book:
                raise BookNotFound()

            if not BookRepo.update_copies(book.id, +1):
                # total_copies sınırı: sayaç zaten dolu, kaydı yine de kapatıyoruz
                current_app.logger.warning(
                    f"[return] book={book.id} available_copies already at total_copies={book.total_copies}"
                )

        current_app.logger.info(
            f"[return] user={requesting_user_id} record={borrow_record_id} book={record.book_id}"
        )
        return ReturnOutcome(record=record, return_date=return_date)

    @staticmethod
    def get_active_record(user_id: int, book_id: int):
        with store_guard("borrow_check"):
            return BorrowRecordRepo.get_active(user_id, book_id)

    @staticmethod
    def get_user_record(record_id: int, user_id: int):
        with store_guard("borrow"):
            record = BorrowRecordRepo.get(record_id)
        if not record or record.user_id != user_id:
            raise RecordNotFound("Borrow record not found")
        return record

    @staticmethod
    def list_user_records(user_id: int):
        with store_guard("borrow_list"):
            return BorrowRecordRepo.list_by_user(user_id)
