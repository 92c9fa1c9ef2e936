"""
Snippetbox — Validation and Form Binding Tests
================================================

What:  Tests for the rule helpers, the Validator, the form binder and the
       create-form checks.
"""

import pytest
from starlette.datastructures import UploadFile

from snippetbox.exceptions import ClientDecodeError
from snippetbox.forms import bind_form, check_urlencoded_utf8
from snippetbox.routes.snippets import check_create_form
from snippetbox.schemas.snippet import SnippetCreateForm
from snippetbox.validator import Validator, max_chars, not_blank, permitted_int


class TestRules:

    @pytest.mark.parametrize("value", ["a", " a ", "\tx\n"])
    def test_not_blank_accepts_text(self, value):
        assert not_blank(value)

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_not_blank_rejects_whitespace(self, value):
        assert not not_blank(value)

    def test_max_chars_boundary(self):
        assert max_chars("x" * 100, 100)
        assert not max_chars("x" * 101, 100)

    def test_max_chars_counts_characters_not_bytes(self):
        # 100 characters, 300 bytes in UTF-8
        assert max_chars("日" * 100, 100)

    def test_permitted_int(self):
        assert permitted_int(7, 1, 7, 365)
        assert not permitted_int(30, 1, 7, 365)
        assert not permitted_int(0, 1, 7, 365)


class TestValidator:

    def test_new_validator_is_valid(self):
        assert Validator().valid

    def test_check_field_records_failures_only(self):
        v = Validator()
        v.check_field(True, "title", "never recorded")
        v.check_field(False, "content", "This field cannot be blank")

        assert v.field_errors == {"content": ["This field cannot be blank"]}
        assert not v.valid

    def test_failures_on_one_field_accumulate(self):
        v = Validator()
        v.check_field(False, "title", "first")
        v.check_field(False, "title", "second")

        assert v.field_errors["title"] == ["first", "second"]

    def test_non_field_error_makes_invalid(self):
        v = Validator()
        v.add_non_field_error("Something is wrong with the form")

        assert not v.valid
        assert v.field_errors == {}

    def test_validators_do_not_share_state(self):
        a, b = Validator(), Validator()
        a.add_field_error("title", "oops")

        assert b.valid


class TestFormBinder:

    def test_binds_and_converts(self):
        form = bind_form(
            SnippetCreateForm,
            [("title", "Hello"), ("content", "World"), ("expires", "7")],
        )

        assert form.title == "Hello"
        assert form.content == "World"
        assert form.expires == 7
        assert form.valid

    def test_field_names_are_case_insensitive(self):
        form = bind_form(SnippetCreateForm, [("Title", "Hello"), ("EXPIRES", "1")])

        assert form.title == "Hello"
        assert form.expires == 1

    def test_missing_and_empty_fields_use_defaults(self):
        form = bind_form(SnippetCreateForm, [("expires", "")])

        assert form.title == ""
        assert form.content == ""
        assert form.expires == 0

    def test_unknown_keys_ignored(self):
        form = bind_form(SnippetCreateForm, [("title", "t"), ("csrf", "x")])

        assert form.title == "t"

    def test_first_value_wins(self):
        form = bind_form(SnippetCreateForm, [("expires", "7"), ("expires", "1")])

        assert form.expires == 7

    def test_validator_cannot_be_bound(self):
        form = bind_form(SnippetCreateForm, [("validator", "anything")])

        assert form.validator.valid

    def test_type_mismatch_raises_client_decode_error(self):
        with pytest.raises(ClientDecodeError) as exc_info:
            bind_form(SnippetCreateForm, [("expires", "soon")])

        assert exc_info.value.context["fields"] == ["expires"]

    def test_file_upload_rejected(self):
        upload = UploadFile(file=None, filename="x.txt")

        with pytest.raises(ClientDecodeError):
            bind_form(SnippetCreateForm, [("title", upload)])

    def test_utf8_body_accepted(self):
        check_urlencoded_utf8("title=%E5%8F%A4%E6%B1%A0&content=café&expires=7".encode("utf-8"))

    @pytest.mark.parametrize("body", [b"title=%ff%fe", b"content=%C3", b"title=\xff"])
    def test_invalid_utf8_rejected(self, body):
        with pytest.raises(ClientDecodeError):
            check_urlencoded_utf8(body)


class TestCreateFormChecks:

    def test_valid_form(self):
        form = SnippetCreateForm(title="Test title", content="Test content", expires=7)

        check_create_form(form)

        assert form.valid

    def test_blank_title(self):
        form = SnippetCreateForm(title="", content="Test content", expires=7)

        check_create_form(form)

        assert not form.valid
        assert form.validator.field_errors["title"] == ["This field cannot be blank"]

    def test_long_title(self):
        form = SnippetCreateForm(title="x" * 101, content="c", expires=1)

        check_create_form(form)

        assert form.validator.field_errors["title"] == [
            "This field cannot be more than 100 characters long"
        ]

    @pytest.mark.parametrize("expires", [0, 2, 30, 364, -1])
    def test_expires_must_be_permitted(self, expires):
        form = SnippetCreateForm(title="t", content="c", expires=expires)

        check_create_form(form)

        assert form.validator.field_errors == {
            "expires": ["This field must equal 1, 7 or 365"]
        }

    def test_every_rule_runs(self):
        form = SnippetCreateForm(title="  ", content="", expires=3)

        check_create_form(form)

        assert set(form.validator.field_errors) == {"title", "content", "expires"}
