from sqlalchemy import select

from bookwise.extensions import db
from bookwise.models.user import User


class UserRepo:
    @staticmethod
    def get_by_email(email: str):
        return db.session.scalars(select(User).where(User.email == email)).first()

    @staticmethod
    def get_by_university_id(university_id: int):
        return db.session.scalars(select(User).where(User.university_id == university_id)).first()

    @staticmethod
    def get_by_id(user_id: int):
        return db.session.get(User, user_id)

    @staticmethod
    def add(user: User):
        db.session.add(user)
        db.session.flush()
        return user
