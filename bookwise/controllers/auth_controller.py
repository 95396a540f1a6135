from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from bookwise.errors import LibraryError, UserNotFound
from bookwise.repositories.unit_of_work import store_guard
from bookwise.repositories.user_repo import UserRepo
from bookwise.services.auth_service import AuthService
from bookwise.services.profile_service import ProfileService
from bookwise.utils.decorators import current_user_id, error_response

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register", endpoint="auth_register")
def register():
    data = request.get_json(silent=True) or {}

    full_name = (data.get("full_name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    password = (data.get("password") or "").strip()

    try:
        university_id = int(data["university_id"])
    except (KeyError, TypeError, ValueError):
        university_id = None

    if not full_name or not email or not password or university_id is None:
        return jsonify({
            "success": False,
            "error": "Validation",
            "message": "full_name/email/university_id/password are required",
        }), 400

    try:
        user = AuthService.register(
            full_name=full_name,
            email=email,
            university_id=university_id,
            password=password,
            university_card=data.get("university_card"),
        )
        return jsonify({"success": True, "user": user.to_dict()}), 201
    except LibraryError as e:
        return error_response(e)


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = request.get_json(silent=True) or {}
    try:
        token, user = AuthService.login(
            (data.get("email") or "").strip().lower(),
            (data.get("password") or "").strip()
        )
        return jsonify({"success": True, "access_token": token, "user": user.to_dict()})
    except LibraryError as e:
        if e.status_code == 400:
            # yanlış kimlik bilgisi
            return jsonify(e.to_dict()), 401
        return error_response(e)


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    try:
        with store_guard("auth"):
            user = UserRepo.get_by_id(current_user_id())
        if not user:
            raise UserNotFound()
        return jsonify({"success": True, "user": user.to_dict()})
    except LibraryError as e:
        return error_response(e)


@auth_bp.patch("/me", endpoint="auth_update_me")
@jwt_required()
def update_me():
    data = request.get_json(silent=True) or {}
    try:
        user = ProfileService.update_profile(current_user_id(), data)
        return jsonify({"success": True, "user": user.to_dict()})
    except LibraryError as e:
        return error_response(e)
