# bookwise/controllers/book_controller.py

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from bookwise.errors import LibraryError
from bookwise.services.book_service import BookService
from bookwise.services.read_access_service import BOOK_NOT_FOUND, ReadAccessService
from bookwise.utils.decorators import current_user_id, error_response

book_bp = Blueprint("books", __name__)


@book_bp.get("/")
def list_books():
    try:
        result = BookService.search_books(
            query=(request.args.get("q") or "").strip() or None,
            genre=(request.args.get("genre") or "").strip() or None,
            page=request.args.get("page", 1, type=int),
            per_page=request.args.get("per_page", 12, type=int),
        )
    except LibraryError as e:
        return error_response(e)

    return jsonify({
        "success": True,
        "data": [b.to_dict() for b in result.items],
        "pagination": {
            "page": result.page,
            "per_page": result.per_page,
            "total": result.total,
            "pages": result.pages,
        },
    })


@book_bp.get("/genres")
def list_genres():
    try:
        return jsonify({"success": True, "data": BookService.genres()})
    except LibraryError as e:
        return error_response(e)


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    try:
        b = BookService.get_book(book_id)
        return jsonify({"success": True, "data": b.to_dict()})
    except LibraryError as e:
        return error_response(e)


@book_bp.get("/<int:book_id>/similar")
def similar_books(book_id: int):
    try:
        books = BookService.similar_books(book_id, limit=request.args.get("limit", 6, type=int))
        return jsonify({"success": True, "data": [b.to_dict() for b in books]})
    except LibraryError as e:
        return error_response(e)


@book_bp.get("/<int:book_id>/read")
@jwt_required()
def read_book(book_id: int):
    try:
        decision = ReadAccessService.check_read_access(current_user_id(), book_id)
    except LibraryError as e:
        return error_response(e)

    if not decision.granted:
        status = 404 if decision.reason == BOOK_NOT_FOUND else 403
        return jsonify({
            "success": False,
            "granted": False,
            "reason": decision.reason,
            "message": decision.message,
        }), status

    return jsonify({"success": True, "granted": True, "data": decision.book.to_dict(with_content=True)})
