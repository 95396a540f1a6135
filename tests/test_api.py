from bookwise.extensions import db
from bookwise.models.book import Book
from bookwise.models.user import Role, VerificationStatus


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_register_and_login(client):
    payload = {
        "full_name": "Ada Lovelace",
        "email": "Ada@Uni.edu",
        "university_id": 42,
        "password": "analytical",
    }
    resp = client.post("/auth/register", json=payload)
    assert resp.status_code == 201
    assert resp.get_json()["user"]["verification_status"] == "UNVERIFIED"

    dup = client.post("/auth/register", json=payload)
    assert dup.status_code == 400
    assert dup.get_json()["message"] == "User with this email already exists"

    bad = client.post("/auth/login", json={"email": "ada@uni.edu", "password": "wrong"})
    assert bad.status_code == 401

    ok = client.post("/auth/login", json={"email": "ada@uni.edu", "password": "analytical"})
    assert ok.status_code == 200
    token = ok.get_json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.get_json()["user"]["email"] == "ada@uni.edu"


def test_register_requires_fields(client):
    resp = client.post("/auth/register", json={"email": "x@uni.edu"})
    assert resp.status_code == 400


def test_catalog_search(client, make_book):
    make_book(title="Clean Code")
    make_book(title="Dune")

    data = client.get("/books/?q=dune").get_json()
    assert [b["title"] for b in data["data"]] == ["Dune"]
    assert data["pagination"]["total"] == 1

    assert client.get("/books/9999").status_code == 404


def test_borrow_flow(client, make_user, make_book, auth_headers):
    user = make_user(verification_status=VerificationStatus.VERIFIED)
    book = make_book(total_copies=1, content="# Hello")
    headers = auth_headers(user)

    resp = client.post("/borrow/", json={"book_id": book.id}, headers=headers)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["verification_status"] == "VERIFIED"
    record_id = body["data"]["id"]

    check = client.get(f"/borrow/check?book_id={book.id}", headers=headers)
    assert check.get_json()["borrow_record"]["id"] == record_id

    read = client.get(f"/books/{book.id}/read", headers=headers)
    assert read.status_code == 200
    assert read.get_json()["data"]["content"] == "# Hello"

    mine = client.get("/borrow/my", headers=headers).get_json()["data"]
    assert mine[0]["status"] == "borrowed"
    assert mine[0]["due_date"] == "6 days left to due"

    receipt = client.get(f"/borrow/{record_id}/receipt", headers=headers).get_json()["data"]
    assert receipt["book"]["title"] == book.title
    assert receipt["borrow_record"]["status"] == "BORROWED"

    ret = client.post(f"/borrow/return/{record_id}", headers=headers)
    assert ret.status_code == 200
    assert ret.get_json()["data"]["return_date"]

    again = client.post(f"/borrow/return/{record_id}", headers=headers)
    assert again.status_code == 404
    assert again.get_json()["success"] is False

    mine = client.get("/borrow/my", headers=headers).get_json()["data"]
    assert mine[0]["status"] == "returned"
    assert mine[0]["due_date"].startswith("Returned on ")


def test_second_borrower_gets_conflict(client, make_user, make_book, auth_headers):
    book = make_book(total_copies=1)
    client.post("/borrow/", json={"book_id": book.id}, headers=auth_headers(make_user()))

    resp = client.post("/borrow/", json={"book_id": book.id}, headers=auth_headers(make_user()))
    assert resp.status_code == 409
    assert resp.get_json() == {
        "success": False,
        "error": "Conflict",
        "message": "Book is not available for borrowing",
    }


def test_borrow_requires_book_id_and_token(client, make_user, auth_headers):
    assert client.post("/borrow/", json={}).status_code == 401
    resp = client.post("/borrow/", json={}, headers=auth_headers(make_user()))
    assert resp.status_code == 400


def test_unverified_reader_is_blocked(client, make_user, make_book, auth_headers):
    user = make_user(verification_status=VerificationStatus.UNVERIFIED)
    book = make_book()
    headers = auth_headers(user)
    client.post("/borrow/", json={"book_id": book.id}, headers=headers)

    resp = client.get(f"/books/{book.id}/read", headers=headers)
    assert resp.status_code == 403
    body = resp.get_json()
    assert body["granted"] is False
    assert body["reason"] == "VERIFICATION_REQUIRED"
    assert body["message"] == "Complete student verification to read this book"


def test_read_without_borrow(client, make_user, make_book, auth_headers):
    book = make_book()
    resp = client.get(f"/books/{book.id}/read", headers=auth_headers(make_user()))
    assert resp.status_code == 403
    assert resp.get_json()["reason"] == "NOT_BORROWED"


def test_receipt_of_other_user_is_hidden(client, make_user, make_book, auth_headers):
    owner = make_user()
    book = make_book()
    record_id = client.post("/borrow/", json={"book_id": book.id}, headers=auth_headers(owner)).get_json()["data"]["id"]

    resp = client.get(f"/borrow/{record_id}/receipt", headers=auth_headers(make_user()))
    assert resp.status_code == 404


def test_verification_review_needs_admin(client, make_user, auth_headers):
    student = make_user(verification_status=VerificationStatus.UNVERIFIED)
    admin = make_user(role=Role.ADMIN)

    submit = client.post("/verification/submit", headers=auth_headers(student))
    assert submit.get_json()["verification_status"] == "PENDING_VERIFICATION"

    forbidden = client.post(f"/verification/{student.id}/review", json={"status": "VERIFIED"},
                            headers=auth_headers(student))
    assert forbidden.status_code == 403

    ok = client.post(f"/verification/{student.id}/review", json={"status": "verified"},
                     headers=auth_headers(admin))
    assert ok.status_code == 200
    assert ok.get_json()["user"]["verification_status"] == "VERIFIED"


def test_similar_books_prefers_genre_and_pads(client, make_book):
    base = make_book(title="Dune")
    same = make_book(title="Hyperion")
    other = make_book(title="Emma")
    other_book = db.session.get(Book, other.id)
    other_book.genre = "Classic"
    db.session.commit()

    data = client.get(f"/books/{base.id}/similar").get_json()["data"]
    titles = [b["title"] for b in data]
    assert titles == ["Hyperion", "Emma"]
    assert base.id not in [b["id"] for b in data]
    assert same.id == data[0]["id"]

    limited = client.get(f"/books/{base.id}/similar?limit=1").get_json()["data"]
    assert [b["title"] for b in limited] == ["Hyperion"]

    assert client.get("/books/9999/similar").status_code == 404


def test_similar_books_caps_at_six(client, make_book):
    base = make_book(title="Base")
    for n in range(8):
        make_book(title=f"Same {n}")

    data = client.get(f"/books/{base.id}/similar").get_json()["data"]
    assert len(data) == 6
    assert all(b["genre"] == "Software" for b in data)


def test_genres(client, make_book):
    make_book(title="A")
    b = make_book(title="B")
    db.session.get(Book, b.id).genre = "Classic"
    db.session.commit()

    assert client.get("/books/genres").get_json()["data"] == ["Classic", "Software"]


def test_update_profile(client, make_user, auth_headers):
    user = make_user()
    headers = auth_headers(user)

    resp = client.patch("/auth/me", json={
        "department": " Computer Science ",
        "date_of_birth": "2001-04-17",
        "contact_number": "+90 555 000 11 22",
    }, headers=headers)
    assert resp.status_code == 200
    body = resp.get_json()["user"]
    assert body["department"] == "Computer Science"
    assert body["date_of_birth"] == "2001-04-17"
    assert body["contact_number"] == "+90 555 000 11 22"

    # sadece gönderilen alan değişir
    resp = client.patch("/auth/me", json={"contact_number": ""}, headers=headers)
    body = resp.get_json()["user"]
    assert body["contact_number"] is None
    assert body["department"] == "Computer Science"


def test_update_profile_rejects_bad_input(client, make_user, auth_headers):
    headers = auth_headers(make_user())
    assert client.patch("/auth/me", json={"date_of_birth": "17/04/2001"}, headers=headers).status_code == 400
    assert client.patch("/auth/me", json={"role": "ADMIN"}, headers=headers).status_code == 400
    assert client.patch("/auth/me", json={"department": "X"}).status_code == 401


def test_non_admin_gets_unauthorized_error_body(client, make_user, auth_headers):
    student = make_user()
    resp = client.post(f"/verification/{student.id}/review", json={"status": "VERIFIED"},
                       headers=auth_headers(student))
    assert resp.status_code == 403
    assert resp.get_json() == {"success": False, "error": "Unauthorized", "message": "Forbidden"}
