"""
Ödünç kayıtlarından ekranda gösterilen durumu türetir.

Hiçbir şey saklanmaz ve saat okunmaz: ``now`` her çağrıda dışarıdan verilir,
böylece profil ve okuyucu ekranları her okumada güncel durumu görür.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from bookwise.models.borrow_record import BorrowStatus

DISPLAY_BORROWED = "borrowed"
DISPLAY_OVERDUE = "overdue"
DISPLAY_RETURNED = "returned"

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class BorrowDisplay:
    status: str
    text: str


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def format_short_date(value: date) -> str:
    """'Oct 05' biçimi."""
    return value.strftime("%b %d")


def days_until_due(due_date, now: datetime) -> int:
    """Kalan tam gün sayısı, sıfıra doğru kesilir (-0.5 gün -> 0)."""
    delta = _as_datetime(due_date) - now
    days = abs(delta) // ONE_DAY
    return days if delta >= timedelta(0) else -days


def describe(record, now: datetime) -> BorrowDisplay:
    if record.status == BorrowStatus.RETURNED:
        return BorrowDisplay(DISPLAY_RETURNED, f"Returned on {format_short_date(record.return_date)}")

    remaining = days_until_due(record.due_date, now)
    if remaining < 0:
        return BorrowDisplay(DISPLAY_OVERDUE, "Overdue Return")
    return BorrowDisplay(DISPLAY_BORROWED, f"{remaining} days left to due")


def is_due_soon(record, now: datetime, within_days: int) -> bool:
    """
    Teslime within_days kala ya da henüz overdue sayılmayan (tam bir günden az
    gecikmiş, "0 days left") aktif kayıtlar.
    """
    if record.status != BorrowStatus.BORROWED:
        return False
    due = _as_datetime(record.due_date)
    return days_until_due(due, now) >= 0 and due <= now + timedelta(days=within_days)


def present_borrowed_book(record, book, now: datetime) -> dict:
    display = describe(record, now)
    data = book.to_dict()
    data.update({
        "borrow_record_id": record.id,
        "borrowed_date": format_short_date(record.borrow_date),
        "due_date": display.text,
        "status": display.status,
        "verification_status": record.verification_status,
    })
    return data
