from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from bookwise.errors import LibraryError
from bookwise.services import status_service
from bookwise.services.borrow_service import BorrowService
from bookwise.services.receipt_service import build_receipt
from bookwise.utils.clock import utcnow
from bookwise.utils.decorators import current_user_id, error_response

borrow_bp = Blueprint("borrow", __name__)


@borrow_bp.post("/")
@jwt_required()
def borrow_book():
    data = request.get_json(silent=True) or {}
    try:
        book_id = int(data["book_id"])
    except (KeyError, TypeError, ValueError):
        return jsonify({"success": False, "error": "Validation", "message": "book_id is required"}), 400

    try:
        outcome = BorrowService.borrow_book(current_user_id(), book_id)
        return jsonify({
            "success": True,
            "data": outcome.record.to_dict(),
            "verification_status": outcome.verification_status,
        }), 201
    except LibraryError as e:
        return error_response(e)


@borrow_bp.post("/return/<int:borrow_record_id>")
@jwt_required()
def return_book(borrow_record_id: int):
    try:
        outcome = BorrowService.return_book(borrow_record_id, current_user_id())
        return jsonify({"success": True, "data": {"return_date": outcome.return_date.isoformat()}})
    except LibraryError as e:
        return error_response(e)


@borrow_bp.get("/check")
@jwt_required()
def check_borrow():
    book_id = request.args.get("book_id", type=int)
    if book_id is None:
        return jsonify({"success": False, "error": "Validation", "message": "book_id is required"}), 400

    try:
        record = BorrowService.get_active_record(current_user_id(), book_id)
    except LibraryError as e:
        return error_response(e)

    if not record:
        return jsonify({"success": False, "error": "NotFound", "message": "Book not borrowed by user"}), 404
    return jsonify({"success": True, "borrow_record": record.to_dict()})


@borrow_bp.get("/my")
@jwt_required()
def my_borrows():
    try:
        rows = BorrowService.list_user_records(current_user_id())
    except LibraryError as e:
        return error_response(e)

    # durum her okumada yeniden hesaplanır
    now = utcnow()
    return jsonify({"success": True, "data": [
        status_service.present_borrowed_book(record, book, now) for record, book in rows
    ]})


@borrow_bp.get("/<int:borrow_record_id>/receipt")
@jwt_required()
def receipt(borrow_record_id: int):
    try:
        record = BorrowService.get_user_record(borrow_record_id, current_user_id())
        return jsonify({"success": True, "data": build_receipt(record)})
    except LibraryError as e:
        return error_response(e)
