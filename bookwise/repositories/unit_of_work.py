from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from bookwise.errors import StoreUnavailable
from bookwise.extensions import db


@contextmanager
def store_guard(tag: str = "db"):
    """
    Veritabanı hatalarını StoreUnavailable olarak yüzeye çıkarır.
    Salt-okunur işlemler için; commit yapmaz.
    """
    try:
        yield db.session
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception(f"[{tag}] store error: {e}")
        raise StoreUnavailable() from e


@contextmanager
def unit_of_work(tag: str = "db"):
    """
    Tek transaction: blok başarılı biterse commit, herhangi bir hatada rollback.
    Repolar kendi başına commit etmez; commit noktası burasıdır.
    """
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception(f"[{tag}] transaction rolled back: {e}")
        raise StoreUnavailable() from e
    except Exception:
        db.session.rollback()
        raise
