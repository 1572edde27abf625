"""Common Core - Domain Exceptions."""
from typing import Any, Dict, List, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    code: str = 'DOMAIN_ERROR'
    default_message: str = 'An error occurred'
    http_status: int = 400

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None, code: Optional[str] = None):
        self.message = message or self.default_message
        self.details = details or {}
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        result = {'code': self.code, 'message': self.message}
        if self.details:
            result['details'] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# Validation Errors
class ValidationError(DomainException):
    code = 'VALIDATION_ERROR'
    default_message = 'Invalid data'
    http_status = 400

    def __init__(self, message: Optional[str] = None, field_errors: Optional[Dict[str, List[str]]] = None, **kwargs):
        super().__init__(message, **kwargs)
        if field_errors:
            self.details['field_errors'] = field_errors


class MissingRequiredFields(ValidationError):
    code = 'MISSING_REQUIRED_FIELDS'
    default_message = 'Missing required fields'

    def __init__(self, fields: Optional[List[str]] = None, **kwargs):
        super().__init__(**kwargs)
        if fields:
            self.details['fields'] = list(fields)


class InvalidAddress(ValidationError):
    code = 'INVALID_ADDRESS'
    default_message = 'Invalid address'


class InvalidRating(ValidationError):
    code = 'INVALID_RATING'
    default_message = 'Rating must be between 1 and 5'


class InvalidComplaintReason(ValidationError):
    code = 'INVALID_COMPLAINT_REASON'
    default_message = 'Wrong complaint reason'


class InvalidFileType(ValidationError):
    code = 'INVALID_FILE_TYPE'
    default_message = 'Unsupported file type'


class TicketMismatch(ValidationError):
    code = 'TICKET_MISMATCH'
    default_message = "Ticket doesn't match the participants"


# Not Found Errors
class NotFoundError(DomainException):
    code = 'NOT_FOUND'
    default_message = 'Resource not found'
    http_status = 404


class UserNotFound(NotFoundError):
    code = 'USER_NOT_FOUND'
    default_message = 'User not found'


class TicketNotFound(NotFoundError):
    code = 'TICKET_NOT_FOUND'
    default_message = 'Ticket not found'


class ChatNotFound(NotFoundError):
    code = 'CHAT_NOT_FOUND'
    default_message = 'Chat not found'


class ReviewNotFound(NotFoundError):
    code = 'REVIEW_NOT_FOUND'
    default_message = 'Review not found'


class AppealNotFound(NotFoundError):
    code = 'APPEAL_NOT_FOUND'
    default_message = 'Appeal not found'


class BlackListNotFound(NotFoundError):
    code = 'BLACKLIST_NOT_FOUND'
    default_message = 'Blacklist not found'


class FavoriteNotFound(NotFoundError):
    code = 'FAVORITE_NOT_FOUND'
    default_message = 'Favorites not found'


# Authentication Errors
class AuthenticationError(DomainException):
    code = 'AUTHENTICATION_ERROR'
    default_message = 'Authentication failed'
    http_status = 401


class InvalidCredentials(AuthenticationError):
    code = 'INVALID_CREDENTIALS'
    default_message = 'Invalid email or password'


# Authorization Errors
class AuthorizationError(DomainException):
    code = 'AUTHORIZATION_ERROR'
    default_message = 'Access denied'
    http_status = 403


class PermissionDenied(AuthorizationError):
    code = 'PERMISSION_DENIED'
    default_message = 'You are not allowed to perform this action'


class RoleMismatch(AuthorizationError):
    code = 'ROLE_MISMATCH'
    default_message = "Role doesn't match"


class SelfActionForbidden(AuthorizationError):
    code = 'SELF_ACTION_FORBIDDEN'
    default_message = 'You cannot do this with yourself'


class ReviewRoleMismatch(RoleMismatch):
    code = 'REVIEW_ROLE_MISMATCH'
    default_message = 'Clients review masters and masters review clients'


class SelfReviewForbidden(SelfActionForbidden):
    code = 'SELF_REVIEW_FORBIDDEN'
    default_message = 'You cannot review yourself'


class Blacklisted(AuthorizationError):
    code = 'BLACKLISTED'
    default_message = 'Blacklisted'


# Conflict Errors
class ConflictError(DomainException):
    code = 'CONFLICT'
    default_message = 'Data conflict'
    http_status = 409


class ChatAlreadyExists(ConflictError):
    code = 'CHAT_ALREADY_EXISTS'
    default_message = 'Chat already exists'


class ListAlreadyExists(ValidationError):
    code = 'LIST_ALREADY_EXISTS'
    default_message = 'List already exists, patch instead'
