from datetime import date

from flask import current_app

from bookwise.errors import UserNotFound, ValidationError
from bookwise.repositories.unit_of_work import unit_of_work
from bookwise.repositories.user_repo import UserRepo

PROFILE_FIELDS = ("department", "date_of_birth", "contact_number")


def _clean(data: dict) -> dict:
    # sadece gönderilen alanlar güncellenir; boş string -> None
    changes = {}
    for field in PROFILE_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if isinstance(value, str):
            value = value.strip() or None
        if field == "date_of_birth" and value is not None:
            try:
                value = date.fromisoformat(value)
            except (TypeError, ValueError):
                raise ValidationError("date_of_birth must be YYYY-MM-DD") from None
        changes[field] = value
    return changes


class ProfileService:
    @staticmethod
    def update_profile(user_id: int, data: dict):
        changes = _clean(data)
        if not changes:
            raise ValidationError(f"Nothing to update, allowed fields: {', '.join(PROFILE_FIELDS)}")

        with unit_of_work("profile"):
            user = UserRepo.get_by_id(user_id)
            if not user:
                raise UserNotFound()
            for field, value in changes.items():
                setattr(user, field, value)

        current_app.logger.info(f"[profile] user={user_id} updated {sorted(changes)}")
        return user
