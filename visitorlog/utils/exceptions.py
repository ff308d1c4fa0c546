"""
Custom exception classes
"""
from fastapi import HTTPException, status


class AppException(Exception):
    """Base application exception"""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class RecordStoreError(AppException):
    """Listing records from the record store failed"""
    def __init__(self, message: str = "Could not load visitor records"):
        super().__init__(message, status_code=status.HTTP_502_BAD_GATEWAY)


class SubmissionError(AppException):
    """The record store rejected a check-in submission"""
    def __init__(self, message: str = "Could not save the visitor entry"):
        super().__init__(message, status_code=status.HTTP_502_BAD_GATEWAY)


class AuthenticationError(AppException):
    """Sign-in was refused by the record store"""
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class UnauthorizedException(HTTPException):
    """Raised when authentication is required or has failed"""
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )


class ValidationException(HTTPException):
    """Input validation failed"""
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class DuplicateException(HTTPException):
    """Resource already exists"""
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)
