"""Client-facing failures of the credit engine. None of them are retried."""


class CreditError(Exception):
    """Base class; carries the envelope error code and the HTTP status."""

    code = "INTERNAL_ERROR"
    status = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ConsentRequired(CreditError):
    code = "CONSENT_REQUIRED"
    status = 403
    default_message = "Please provide consent first"


class ScoreRequired(CreditError):
    code = "SCORE_REQUIRED"
    status = 400
    default_message = "Please calculate your credit score first"


class OfferNotFound(CreditError):
    code = "NOT_FOUND"
    status = 404
    default_message = "Offer not found"
