"""Application errors.

Each error carries a short message that is safe to show to the end user and
the HTTP status the route layer responds with. Storage details never end up
in ``message``; they are logged where the storage exception is converted.
"""


class AppError(Exception):
    status_code = 400
    default_message = 'Something went wrong.'

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    default_message = 'Invalid input format.'


class DuplicateEmailError(AppError):
    default_message = 'Email is already registered.'


class InvalidCredentialsError(AppError):
    status_code = 401
    default_message = 'Invalid email or password.'


class SelfDemotionError(AppError):
    default_message = 'You cannot remove your own admin role.'


class InternalError(AppError):
    status_code = 503
    default_message = 'Internal error occurred. Please try again.'
