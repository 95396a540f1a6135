from bookwise.extensions import db
from bookwise.models.user import User, VerificationStatus
from bookwise.services.borrow_service import BorrowService
from bookwise.services.read_access_service import (
    BOOK_NOT_FOUND,
    NOT_BORROWED,
    VERIFICATION_REQUIRED,
    ReadAccessService,
)


def test_unknown_book(make_user):
    user = make_user()
    decision = ReadAccessService.check_read_access(user.id, 4242)
    assert not decision.granted
    assert decision.reason == BOOK_NOT_FOUND


def test_not_borrowed(make_user, make_book):
    user = make_user()
    book = make_book()
    decision = ReadAccessService.check_read_access(user.id, book.id)
    assert not decision.granted
    assert decision.reason == NOT_BORROWED
    assert decision.message == "You haven't borrowed this book"


def test_verified_borrower_gets_content(make_user, make_book):
    user = make_user(verification_status=VerificationStatus.VERIFIED)
    book = make_book(content="# Chapter 1\nIt was a dark and stormy night.")
    BorrowService.borrow_book(user.id, book.id)

    decision = ReadAccessService.check_read_access(user.id, book.id)
    assert decision.granted
    assert decision.reason is None
    assert decision.book.content.startswith("# Chapter 1")


def test_later_verification_does_not_unlock_existing_loan(make_user, make_book):
    user = make_user(verification_status=VerificationStatus.PENDING_VERIFICATION)
    book = make_book()
    BorrowService.borrow_book(user.id, book.id)

    db.session.get(User, user.id).verification_status = VerificationStatus.VERIFIED
    db.session.commit()

    decision = ReadAccessService.check_read_access(user.id, book.id)
    assert not decision.granted
    assert decision.reason == VERIFICATION_REQUIRED


def test_losing_verification_keeps_existing_access(make_user, make_book):
    user = make_user(verification_status=VerificationStatus.VERIFIED)
    book = make_book()
    BorrowService.borrow_book(user.id, book.id)

    db.session.get(User, user.id).verification_status = VerificationStatus.REJECTED
    db.session.commit()

    assert ReadAccessService.check_read_access(user.id, book.id).granted


def test_returned_book_cannot_be_read(make_user, make_book):
    user = make_user()
    book = make_book()
    outcome = BorrowService.borrow_book(user.id, book.id)
    BorrowService.return_book(outcome.record.id, user.id)

    decision = ReadAccessService.check_read_access(user.id, book.id)
    assert decision.reason == NOT_BORROWED
