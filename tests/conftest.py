import pytest
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash

from bookwise import create_app
from bookwise.config import TestConfig
from bookwise.extensions import db
from bookwise.models.book import Book
from bookwise.models.user import Role, User, VerificationStatus


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make(verification_status=VerificationStatus.VERIFIED, role=Role.USER, password="secret123"):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            full_name=f"Student {n}",
            email=f"student{n}@uni.edu",
            university_id=1000 + n,
            password_hash=generate_password_hash(password),
            role=role,
            verification_status=verification_status,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def make_book(app):
    def _make(total_copies=3, available_copies=None, title="Clean Code", content="# Chapter 1"):
        book = Book(
            title=title,
            author="Robert C. Martin",
            genre="Software",
            total_copies=total_copies,
            available_copies=total_copies if available_copies is None else available_copies,
            content=content,
        )
        db.session.add(book)
        db.session.commit()
        return book

    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers
