"""Form schemas and validation rules for login / signup."""

from __future__ import annotations

import re

from pydantic import BaseModel

# Any character except a line terminator
_LINE_CHAR = r"[^\n\r\u2028\u2029]"

_USER_RE = re.compile(_LINE_CHAR + r"{1,20}")
_FNAME_RE = re.compile(_LINE_CHAR + r"{1,100}")
_LNAME_RE = re.compile(_LINE_CHAR + r"{1,100}")
_PASS_RE = re.compile(_LINE_CHAR + r"{8,20}")
_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

SIGNUP_ERROR_FIELDS = (
    "userNameError",
    "firstNameError",
    "lastNameError",
    "passwordError",
    "verifyError",
    "emailError",
)


class LoginForm(BaseModel):
    userName: str = ""
    password: str = ""


class SignupForm(BaseModel):
    userName: str = ""
    firstName: str = ""
    lastName: str = ""
    password: str = ""
    verify: str = ""
    email: str = ""

    def validate_fields(self) -> dict[str, str]:
        """Return every error slot, with at most the first failing rule filled in."""
        errors = dict.fromkeys(SIGNUP_ERROR_FIELDS, "")

        if not _USER_RE.fullmatch(self.userName):
            errors["userNameError"] = "Invalid user name."
        elif not _FNAME_RE.fullmatch(self.firstName):
            errors["firstNameError"] = "Invalid first name."
        elif not _LNAME_RE.fullmatch(self.lastName):
            errors["lastNameError"] = "Invalid last name."
        elif not _PASS_RE.fullmatch(self.password):
            errors["passwordError"] = "Password must be 8–20 characters."
        elif self.password != self.verify:
            errors["verifyError"] = "Passwords do not match."
        elif self.email and not _EMAIL_RE.fullmatch(self.email):
            errors["emailError"] = "Invalid email address."
        return errors


class UserRead(BaseModel):
    """Fields handed to the dashboard template."""

    userId: int
    userName: str
    firstName: str
    lastName: str
    email: str | None = None
    isAdmin: bool = False

    @classmethod
    def from_user(cls, user, user_id: int | None = None) -> "UserRead":
        return cls(
            userId=user_id if user_id is not None else user.id,
            userName=user.user_name,
            firstName=user.first_name,
            lastName=user.last_name,
            email=user.email,
            isAdmin=bool(user.is_admin),
        )
