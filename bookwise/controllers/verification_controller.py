from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from bookwise.errors import LibraryError
from bookwise.models.user import Role
from bookwise.services.verification_service import VerificationService
from bookwise.utils.decorators import current_user_id, error_response, role_required

verification_bp = Blueprint("verification", __name__)


@verification_bp.post("/submit")
@jwt_required()
def submit():
    try:
        user = VerificationService.submit(current_user_id())
        return jsonify({"success": True, "verification_status": user.verification_status})
    except LibraryError as e:
        return error_response(e)


@verification_bp.post("/<int:user_id>/review")
@jwt_required()
@role_required(Role.ADMIN)
def review(user_id: int):
    data = request.get_json(silent=True) or {}
    try:
        user = VerificationService.review(user_id, (data.get("status") or "").strip().upper())
        return jsonify({"success": True, "user": user.to_dict()})
    except LibraryError as e:
        return error_response(e)
