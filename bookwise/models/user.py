from bookwise.extensions import db
from bookwise.utils.clock import utcnow


class VerificationStatus:
    UNVERIFIED = "UNVERIFIED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"

    ALL = (UNVERIFIED, PENDING_VERIFICATION, VERIFIED, REJECTED)


class Role:
    USER = "USER"
    ADMIN = "ADMIN"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    university_id = db.Column(db.Integer, unique=True, nullable=False, index=True)
    university_card = db.Column(db.String(500), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.String(20), nullable=False, default=Role.USER)
    verification_status = db.Column(
        db.String(30), nullable=False, default=VerificationStatus.UNVERIFIED
    )
    department = db.Column(db.String(255), nullable=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    contact_number = db.Column(db.String(30), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "university_id": self.university_id,
            "role": self.role,
            "verification_status": self.verification_status,
            "department": self.department,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "contact_number": self.contact_number,
        }
