from __future__ import annotations

from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token

from bookwise.errors import ValidationError
from bookwise.models.user import Role, User, VerificationStatus
from bookwise.repositories.unit_of_work import store_guard, unit_of_work
from bookwise.repositories.user_repo import UserRepo


class AuthService:
    @staticmethod
    def register(full_name: str, email: str, university_id: int, password: str,
                 university_card: str | None = None):
        with unit_of_work("auth"):
            if UserRepo.get_by_email(email):
                raise ValidationError("User with this email already exists")
            if UserRepo.get_by_university_id(university_id):
                raise ValidationError("University ID already exists")

            user = User(
                full_name=full_name,
                email=email,
                university_id=university_id,
                university_card=university_card,
                password_hash=generate_password_hash(password),
                role=Role.USER,
                verification_status=VerificationStatus.UNVERIFIED,
            )
            UserRepo.add(user)
        return user

    @staticmethod
    def login(email: str, password: str):
        with store_guard("auth"):
            user = UserRepo.get_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            raise ValidationError("Invalid email or password")

        token = create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "email": user.email}
        )
        return token, user
