import re

from tasklist.errors import ValidationError

# bcrypt only accepts up to 72 bytes of input
MAX_PASSWORD_BYTES = 72

USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")


def validate_username(username: str) -> None:
    """Usernames are 1-64 characters of letters, digits, '_', '.' or '-'."""
    if not USERNAME_RE.fullmatch(username):
        raise ValidationError("Username may only contain letters, digits, '_', '.' and '-' (max 64 characters)")


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - No whitespace characters
    - Minimum length of 2 characters
    - At most 72 bytes when UTF-8 encoded

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < 2:
        raise ValidationError("Password must be at least 2 characters long")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")
