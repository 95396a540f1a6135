from __future__ import annotations

from sqlalchemy import or_, select, update

from bookwise.extensions import db
from bookwise.models.book import Book


class BookRepo:
    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def search(query: str | None = None, genre: str | None = None, page: int = 1, per_page: int = 12):
        stmt = select(Book)
        if query:
            like = f"%{query}%"
            stmt = stmt.where(or_(Book.title.ilike(like), Book.author.ilike(like), Book.genre.ilike(like)))
        if genre:
            stmt = stmt.where(Book.genre.ilike(genre))
        stmt = stmt.order_by(Book.created_at.desc(), Book.id.desc())
        return db.paginate(stmt, page=page, per_page=per_page, error_out=False)

    @staticmethod
    def genres():
        return db.session.scalars(select(Book.genre).distinct().order_by(Book.genre)).all()

    @staticmethod
    def similar(book: Book, limit: int = 6):
        """
        Aynı türden en fazla `limit` kitap (kitabın kendisi hariç);
        tür yetmezse diğer kitaplarla tamamlanır.
        """
        same_genre = db.session.scalars(
            select(Book)
            .where(Book.genre == book.genre, Book.id != book.id)
            .order_by(Book.created_at.desc(), Book.id.desc())
            .limit(limit)
        ).all()
        if len(same_genre) >= limit:
            return same_genre

        taken = [book.id] + [b.id for b in same_genre]
        others = db.session.scalars(
            select(Book)
            .where(Book.id.not_in(taken))
            .order_by(Book.created_at.desc(), Book.id.desc())
            .limit(limit - len(same_genre))
        ).all()
        return same_genre + others

    @staticmethod
    def add(book: Book):
        db.session.add(book)
        db.session.flush()
        return book

    @staticmethod
    def update_copies(book_id: int, delta: int) -> bool:
        """
        available_copies += delta, tek UPDATE ile.
        Sonuç 0..total_copies aralığı dışına çıkacaksa hiçbir satır değişmez ve False döner.
        """
        result = db.session.execute(
            update(Book)
            .where(
                Book.id == book_id,
                Book.available_copies + delta >= 0,
                Book.available_copies + delta <= Book.total_copies,
            )
            .values(available_copies=Book.available_copies + delta)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1
