from sqlalchemy import select, update

from bookwise.extensions import db
from bookwise.models.book import Book
from bookwise.models.borrow_record import BorrowRecord, BorrowStatus


class BorrowRecordRepo:
    @staticmethod
    def get(record_id: int, for_update: bool = False):
        stmt = select(BorrowRecord).where(BorrowRecord.id == record_id)
        if for_update:
            stmt = stmt.with_for_update()
        return db.session.scalars(stmt).first()

    @staticmethod
    def get_active(user_id: int, book_id: int):
        return db.session.scalars(
            select(BorrowRecord).where(
                BorrowRecord.user_id == user_id,
                BorrowRecord.book_id == book_id,
                BorrowRecord.status == BorrowStatus.BORROWED,
            )
        ).first()

    @staticmethod
    def list_by_user(user_id: int):
        """(record, book) çiftleri, en yeni ödünç önce."""
        return db.session.execute(
            select(BorrowRecord, Book)
            .join(Book, BorrowRecord.book_id == Book.id)
            .where(BorrowRecord.user_id == user_id)
            .order_by(BorrowRecord.borrow_date.desc(), BorrowRecord.id.desc())
        ).all()

    @staticmethod
    def list_active():
        return db.session.scalars(
            select(BorrowRecord)
            .where(BorrowRecord.status == BorrowStatus.BORROWED)
            .order_by(BorrowRecord.due_date.asc())
        ).all()

    @staticmethod
    def insert(record: BorrowRecord):
        db.session.add(record)
        db.session.flush()
        return record

    @staticmethod
    def update(record_id: int, fields: dict, **criteria) -> bool:
        """
        Koşullu güncelleme: id + verilen ek kolon eşitlikleri tutarsa alanları yazar.
        Tam olarak bir satır değiştiyse True.
        """
        conditions = [BorrowRecord.id == record_id]
        conditions += [getattr(BorrowRecord, name) == value for name, value in criteria.items()]
        result = db.session.execute(
            update(BorrowRecord)
            .where(*conditions)
            .values(**fields)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1
