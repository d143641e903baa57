"""
Domain errors raised by the store, the services and the email drivers.

Each error carries the HTTP status the API answers with; the handler in
``app.main`` renders them as ``{"error": message}``.
"""

from typing import Optional


class ReflectionError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ReflectionError):
    status_code = 404
    default_message = "Not found"


class RecordNotFoundError(NotFoundError):
    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record not found: {record_id}")


class MeetingNotFoundError(NotFoundError):
    default_message = "Meeting not found"


class TemplateNotFoundError(NotFoundError):
    default_message = "Template not found"


class QuestionNotFoundError(NotFoundError):
    default_message = "Question not found"


class ConflictError(ReflectionError):
    status_code = 409
    default_message = "Conflict"


class DuplicateRecordError(ConflictError):
    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record already exists: {record_id}")


class ForbiddenError(ReflectionError):
    status_code = 403
    default_message = "Forbidden"


class TierRestrictedError(ForbiddenError):
    default_message = "Custom templates require the pro tier"


class AuthenticationError(ReflectionError):
    status_code = 401
    default_message = "Invalid or missing bearer token"


class ValidationFailedError(ReflectionError):
    status_code = 422
    default_message = "Validation failed"


class EmailDeliveryError(ReflectionError):
    default_message = "Failed to send email"


class EmailConfigurationError(EmailDeliveryError):
    default_message = "Email driver is not configured"
