"""Request schemas for the account forms.

Fields are strict strings so repeated form fields (lists) or uploads never
reach a store query.
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, StrictStr, field_validator

MAX_NAME_LENGTH = 30
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 30
BCRYPT_MAX_BYTES = 72


def check_email_grammar(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError('Invalid email address.') from exc
    # stored and looked up exactly as typed
    return value


class RoleChangeRequest(BaseModel):
    email: StrictStr

    @field_validator('email')
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        return check_email_grammar(value)


class LoginRequest(BaseModel):
    email: StrictStr
    password: StrictStr

    @field_validator('email')
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        return check_email_grammar(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not MIN_PASSWORD_LENGTH <= len(value) <= MAX_PASSWORD_LENGTH:
            raise ValueError(
                f'Password must be {MIN_PASSWORD_LENGTH} to {MAX_PASSWORD_LENGTH} characters.'
            )
        if len(value.encode('utf-8')) > BCRYPT_MAX_BYTES:
            raise ValueError('Password is too long.')
        return value


class SignupRequest(LoginRequest):
    name: StrictStr

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value or len(value) > MAX_NAME_LENGTH:
            raise ValueError(f'Name must be 1 to {MAX_NAME_LENGTH} characters.')
        return value
