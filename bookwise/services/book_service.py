from bookwise.errors import BookNotFound
from bookwise.repositories.book_repo import BookRepo
from bookwise.repositories.unit_of_work import store_guard

MAX_PER_PAGE = 50


class BookService:
    @staticmethod
    def search_books(query=None, genre=None, page: int = 1, per_page: int = 12):
        page = max(page, 1)
        per_page = min(max(per_page, 1), MAX_PER_PAGE)
        with store_guard("books"):
            return BookRepo.search(query=query, genre=genre, page=page, per_page=per_page)

    @staticmethod
    def get_book(book_id: int):
        with store_guard("books"):
            book = BookRepo.get(book_id)
        if not book:
            raise BookNotFound()
        return book

    @staticmethod
    def similar_books(book_id: int, limit: int = 6):
        limit = min(max(limit, 1), MAX_PER_PAGE)
        with store_guard("books"):
            book = BookRepo.get(book_id)
            if not book:
                raise BookNotFound()
            return BookRepo.similar(book, limit=limit)

    @staticmethod
    def genres():
        with store_guard("books"):
            return BookRepo.genres()
