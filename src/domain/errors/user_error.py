"""User management domain errors."""


class UserError:
    """User error constants.

    Used in Result types for user management failures.
    These are NOT exceptions - they are error value constants
    used in railway-oriented programming pattern.
    """

    USER_NOT_FOUND = "User not found"
    EMAIL_ALREADY_EXISTS = "Email has already been taken"
    INVALID_EMAIL = "Email is invalid"
    PASSWORD_REQUIRED = "Password can't be blank"
    PASSWORD_TOO_SHORT = "Password is too short (minimum is 6 characters)"
    PASSWORD_CONFIRMATION_MISMATCH = "Password confirmation doesn't match Password"
    INVALID_ROLE = "Role is not a known role"
    ATTRIBUTE_NOT_PERMITTED = "You are not allowed to change this attribute"
