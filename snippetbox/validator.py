"""
Snippetbox — Form Validation Helpers
======================================

What:  Stateless rule checks plus a Validator that collects error messages.
Why:   Every form in the application validates the same way: run each rule,
       record a message for every rule that fails, then ask `valid`.
How:   Rule functions return plain booleans. Forms carry a Validator as a
       named field and call check_field() once per rule.

Usage:
    form.validator.check_field(not_blank(form.title), "title", "This field cannot be blank")
    form.validator.check_field(max_chars(form.title, 100), "title", "...")
    if not form.validator.valid:
        ...re-render the form with form.validator.field_errors...

All rules run unconditionally: a field that fails two rules gets two messages.
"""

from typing import Dict, List

from pydantic import BaseModel, Field


def not_blank(value: str) -> bool:
    """True if the value contains anything besides whitespace."""
    return value.strip() != ""


def max_chars(value: str, n: int) -> bool:
    """
    True if the value is at most n characters long.

    Counts characters (code points), not bytes, so "日本語" is 3 characters.
    """
    return len(value) <= n


def permitted_int(value: int, *permitted: int) -> bool:
    """True if the value is exactly one of the permitted integers."""
    return value in permitted


class Validator(BaseModel):
    """
    Validation result attached to a form.

    Attributes:
        field_errors:     field name → messages, in the order the checks ran
        non_field_errors: errors that belong to the form as a whole
    """

    field_errors: Dict[str, List[str]] = Field(default_factory=dict)
    non_field_errors: List[str] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.field_errors and not self.non_field_errors

    def add_field_error(self, key: str, message: str) -> None:
        self.field_errors.setdefault(key, []).append(message)

    def add_non_field_error(self, message: str) -> None:
        self.non_field_errors.append(message)

    def check_field(self, ok: bool, key: str, message: str) -> None:
        """Record `message` against `key` when the check did not pass."""
        if not ok:
            self.add_field_error(key, message)
