from fastapi import status


class BlogError(Exception):
    """Base class for errors that map onto an HTTP response"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"
    headers = None

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class Unauthorized(BlogError):
    """Missing or invalid bearer credential where one is required"""
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Could not validate credentials"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredentials(BlogError):
    """Signin failure, same message for unknown user and wrong password"""
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid credentials"


class AlreadyExists(BlogError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "User already exists"


class NotFoundOrForbidden(BlogError):
    """Absent and not-yours look the same to the caller"""
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Post not found or access denied"


class InvalidOperation(BlogError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid operation"


class InternalError(BlogError):
    pass
