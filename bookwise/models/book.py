from bookwise.extensions import db
from bookwise.utils.clock import utcnow


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("total_copies >= 0", name="ck_books_total_non_negative"),
        db.CheckConstraint(
            "available_copies >= 0 AND available_copies <= total_copies",
            name="ck_books_available_in_range",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False, index=True)
    author = db.Column(db.String(255), nullable=False, index=True)
    genre = db.Column(db.String(100), nullable=False, index=True)
    rating = db.Column(db.Integer, nullable=False, default=0)

    total_copies = db.Column(db.Integer, nullable=False, default=1)
    available_copies = db.Column(db.Integer, nullable=False, default=1)

    description = db.Column(db.Text, nullable=True)
    summary = db.Column(db.Text, nullable=True)
    cover_url = db.Column(db.String(500), nullable=True)
    cover_color = db.Column(db.String(7), nullable=True)
    video_url = db.Column(db.String(500), nullable=True)
    content = db.Column(db.Text, nullable=True)  # markdown body for the reader

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self, with_content: bool = False) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "genre": self.genre,
            "rating": self.rating,
            "total_copies": self.total_copies,
            "available_copies": self.available_copies,
            "description": self.description,
            "summary": self.summary,
            "cover_url": self.cover_url,
            "cover_color": self.cover_color,
            "video_url": self.video_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if with_content:
            data["content"] = self.content or ""
        return data
