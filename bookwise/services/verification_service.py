from flask import current_app

from bookwise.errors import InvalidTransition, UserNotFound, ValidationError
from bookwise.models.user import VerificationStatus
from bookwise.repositories.unit_of_work import unit_of_work
from bookwise.repositories.user_repo import UserRepo

REVIEW_OUTCOMES = (VerificationStatus.VERIFIED, VerificationStatus.REJECTED)


class VerificationService:
    """
    Öğrenci doğrulama akışı: kullanıcı başvurur (PENDING_VERIFICATION),
    admin onaylar ya da reddeder. Mevcut ödünç kayıtlarındaki snapshot değişmez.
    """

    @staticmethod
    def submit(user_id: int):
        with unit_of_work("verification"):
            user = UserRepo.get_by_id(user_id)
            if not user:
                raise UserNotFound()
            if user.verification_status == VerificationStatus.VERIFIED:
                raise InvalidTransition("You are already verified")
            if user.verification_status == VerificationStatus.PENDING_VERIFICATION:
                raise InvalidTransition("Your verification request is already under review")
            user.verification_status = VerificationStatus.PENDING_VERIFICATION

        current_app.logger.info(f"[verification] user={user_id} submitted")
        return user

    @staticmethod
    def review(user_id: int, outcome: str):
        if outcome not in REVIEW_OUTCOMES:
            raise ValidationError(f"status must be one of {', '.join(REVIEW_OUTCOMES)}")

        with unit_of_work("verification"):
            user = UserRepo.get_by_id(user_id)
            if not user:
                raise UserNotFound()
            user.verification_status = outcome

        current_app.logger.info(f"[verification] user={user_id} -> {outcome}")
        return user
