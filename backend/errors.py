# backend/errors.py
"""Domain errors raised by the services and mapped to JSON responses in main.py."""


class ReviewAppError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# Missing or malformed input
class ValidationError(ReviewAppError):
    status_code = 400
    message = "Invalid request."


class DuplicateEmailError(ReviewAppError):
    status_code = 400
    message = "Email already in use."


# Same message for unknown email and wrong password
class InvalidCredentialsError(ReviewAppError):
    status_code = 400
    message = "Invalid email or password."


class MissingTokenError(ReviewAppError):
    status_code = 401
    message = "Missing auth token"


class InvalidTokenError(ReviewAppError):
    status_code = 401
    message = "Invalid or expired token"


class NotFoundError(ReviewAppError):
    status_code = 404
    message = "Not found"


class InternalError(ReviewAppError):
    pass
