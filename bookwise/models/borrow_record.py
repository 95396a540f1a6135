from sqlalchemy import text

from bookwise.extensions import db
from bookwise.utils.clock import utcnow


class BorrowStatus:
    BORROWED = "BORROWED"
    RETURNED = "RETURNED"


class BorrowRecord(db.Model):
    __tablename__ = "borrow_records"
    __table_args__ = (
        db.CheckConstraint(
            "(status = 'RETURNED' AND return_date IS NOT NULL) "
            "OR (status = 'BORROWED' AND return_date IS NULL)",
            name="ck_borrow_records_return_date_matches_status",
        ),
        # one active loan per (user, book)
        db.Index(
            "uq_borrow_records_active_user_book",
            "user_id",
            "book_id",
            unique=True,
            sqlite_where=text("status = 'BORROWED'"),
            postgresql_where=text("status = 'BORROWED'"),
        ),
    )

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    borrow_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    due_date = db.Column(db.DateTime, nullable=False)
    return_date = db.Column(db.Date, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=BorrowStatus.BORROWED)
    # VERIFIED / UNVERIFIED, copied from the user when the loan is created
    verification_status = db.Column(db.String(20), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    user = db.relationship("User", backref="borrow_records")
    book = db.relationship("Book", backref="borrow_records")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "book_id": self.book_id,
            "borrow_date": self.borrow_date.isoformat() if self.borrow_date else None,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "return_date": self.return_date.isoformat() if self.return_date else None,
            "status": self.status,
            "verification_status": self.verification_status,
        }
