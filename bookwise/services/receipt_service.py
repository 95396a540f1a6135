from bookwise.services import status_service
from bookwise.utils.clock import utcnow

LIBRARY_NAME = "BookWise University Library"


def receipt_id_for(record) -> str:
    return f"BW-{record.borrow_date:%Y%m%d}-{record.id:06d}"


def build_receipt(record, now=None) -> dict:
    """Ödünç fişi; HTML/PDF'e dönüştürmek istemcinin işi."""
    now = now or utcnow()
    display = status_service.describe(record, now)
    user = record.user
    book = record.book
    return {
        "receipt_id": receipt_id_for(record),
        "library": LIBRARY_NAME,
        "issued_at": now.isoformat(),
        "student": {
            "full_name": user.full_name,
            "university_id": user.university_id,
            "email": user.email,
            "department": user.department,
        },
        "book": {
            "id": book.id,
            "title": book.title,
            "author": book.author,
            "genre": book.genre,
        },
        "borrow_record": {
            "id": record.id,
            "borrow_date": status_service.format_short_date(record.borrow_date),
            "due_date": record.due_date.date().isoformat(),
            "return_date": record.return_date.isoformat() if record.return_date else None,
            "status": display.status.upper(),
            "status_text": display.text,
        },
    }
