"""API error definitions.

All API errors are defined here with their corresponding HTTP status codes.
"""

from enum import Enum


class ApiErrorCode(str, Enum):
    """Standardized error codes for the API.

    Format: E_CATEGORY_NAME
    """

    # Authentication errors (401)
    E_UNAUTHENTICATED = "E_UNAUTHENTICATED"
    E_INVALID_CREDENTIALS = "E_INVALID_CREDENTIALS"

    # Authorization errors (403)
    E_FORBIDDEN = "E_FORBIDDEN"
    E_CAPTAIN_REQUIRED = "E_CAPTAIN_REQUIRED"
    E_INVALID_INVITE = "E_INVALID_INVITE"

    # Not found errors (404)
    E_NOT_FOUND = "E_NOT_FOUND"
    E_SESSION_NOT_FOUND = "E_SESSION_NOT_FOUND"
    E_VIDEO_NOT_FOUND = "E_VIDEO_NOT_FOUND"
    E_ARTICLE_NOT_FOUND = "E_ARTICLE_NOT_FOUND"
    E_FOLDER_NOT_FOUND = "E_FOLDER_NOT_FOUND"

    # Validation errors (400)
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_NAME_INVALID = "E_NAME_INVALID"
    E_INVALID_VIDEO_REF = "E_INVALID_VIDEO_REF"
    E_INVALID_SHEET = "E_INVALID_SHEET"

    # Conflict errors (409)
    E_CONFLICT = "E_CONFLICT"
    E_USERNAME_TAKEN = "E_USERNAME_TAKEN"

    # Server errors
    E_INTERNAL = "E_INTERNAL"  # 500
    E_BACKEND = "E_BACKEND"  # 500


# Error code to HTTP status mapping
ERROR_CODE_TO_STATUS: dict[ApiErrorCode, int] = {
    ApiErrorCode.E_UNAUTHENTICATED: 401,
    ApiErrorCode.E_INVALID_CREDENTIALS: 401,
    ApiErrorCode.E_FORBIDDEN: 403,
    ApiErrorCode.E_CAPTAIN_REQUIRED: 403,
    ApiErrorCode.E_INVALID_INVITE: 403,
    ApiErrorCode.E_NOT_FOUND: 404,
    ApiErrorCode.E_SESSION_NOT_FOUND: 404,
    ApiErrorCode.E_VIDEO_NOT_FOUND: 404,
    ApiErrorCode.E_ARTICLE_NOT_FOUND: 404,
    ApiErrorCode.E_FOLDER_NOT_FOUND: 404,
    ApiErrorCode.E_INVALID_REQUEST: 400,
    ApiErrorCode.E_NAME_INVALID: 400,
    ApiErrorCode.E_INVALID_VIDEO_REF: 400,
    ApiErrorCode.E_INVALID_SHEET: 400,
    ApiErrorCode.E_CONFLICT: 409,
    ApiErrorCode.E_USERNAME_TAKEN: 409,
    ApiErrorCode.E_INTERNAL: 500,
    ApiErrorCode.E_BACKEND: 500,
}


class ApiError(Exception):
    """Base exception for API errors.

    Attributes:
        code: The error code enum value
        message: Human-readable error message
        status_code: HTTP status code (derived from code)
    """

    def __init__(self, code: ApiErrorCode, message: str):
        self.code = code
        self.message = message
        self.status_code = ERROR_CODE_TO_STATUS.get(code, 500)
        super().__init__(message)


class NotFoundError(ApiError):
    """Resource not found error."""

    def __init__(self, code: ApiErrorCode = ApiErrorCode.E_NOT_FOUND, message: str = "Not found"):
        super().__init__(code, message)


class UnauthenticatedError(ApiError):
    """Missing or invalid session token."""

    def __init__(
        self, code: ApiErrorCode = ApiErrorCode.E_UNAUTHENTICATED, message: str = "Unauthorized"
    ):
        super().__init__(code, message)


class ForbiddenError(ApiError):
    """Authorization failure error."""

    def __init__(self, code: ApiErrorCode = ApiErrorCode.E_FORBIDDEN, message: str = "Forbidden"):
        super().__init__(code, message)


class InvalidRequestError(ApiError):
    """Invalid request error."""

    def __init__(
        self, code: ApiErrorCode = ApiErrorCode.E_INVALID_REQUEST, message: str = "Invalid request"
    ):
        super().__init__(code, message)


class ConflictError(ApiError):
    """Uniqueness conflict error."""

    def __init__(self, code: ApiErrorCode = ApiErrorCode.E_CONFLICT, message: str = "Conflict"):
        super().__init__(code, message)


class BackendError(ApiError):
    """The external store rejected or failed a call.

    The store's own message is passed through to the caller unchanged.
    """

    def __init__(self, message: str):
        super().__init__(ApiErrorCode.E_BACKEND, message)
