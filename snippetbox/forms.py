"""
Snippetbox — Form Binder
==========================

What:  Decodes a submitted form body into a typed pydantic form object.
Why:   Handlers work with `form.expires` as an int instead of poking at a
       multi-dict of strings, and every decode failure is reported the same
       way: ClientDecodeError, which the global handler turns into a 400.
How:   Request.form() (python-multipart) parses urlencoded and multipart
       bodies; submitted keys are matched to model fields case-insensitively;
       pydantic performs the type conversion.

Decoding rules:
    - Keys that match no field are ignored
    - The first value wins when a key is submitted more than once
    - Empty values are treated as missing and fall back to the field default
    - File uploads are never valid form values
    - The form's `validator` field is never bound from the body
    - Urlencoded bodies must be valid UTF-8 once percent-decoded; anything
      else is a decode failure, not text with replacement characters
"""

from typing import Any, Dict, Type, TypeVar
from urllib.parse import parse_qsl

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile
from starlette.requests import Request

from snippetbox.exceptions import ClientDecodeError


FormT = TypeVar("FormT", bound=BaseModel)

# Fields that carry server-side state and must never come from the client
UNBOUND_FIELDS = frozenset({"validator"})


def bind_form(form_cls: Type[FormT], items) -> FormT:
    """
    Build a form object from (key, value) pairs.

    Args:
        form_cls: pydantic model describing the form
        items:    iterable of (key, value) pairs, e.g. FormData.multi_items()

    Raises:
        ClientDecodeError: A value is a file, or pydantic rejected a value.
    """
    fields = {
        name.lower(): name
        for name in form_cls.model_fields
        if name not in UNBOUND_FIELDS
    }

    data: Dict[str, Any] = {}
    for key, value in items:
        name = fields.get(key.lower())
        if name is None or name in data:
            continue
        if isinstance(value, UploadFile):
            raise ClientDecodeError(context={"field": name, "reason": "file upload"})
        if value == "":
            continue
        data[name] = value

    try:
        return form_cls.model_validate(data)
    except PydanticValidationError as e:
        raise ClientDecodeError(
            context={
                "form": form_cls.__name__,
                "fields": [".".join(str(p) for p in err["loc"]) for err in e.errors()],
            }
        ) from e


def check_urlencoded_utf8(body: bytes) -> None:
    """
    Reject an application/x-www-form-urlencoded body that is not UTF-8.

    Starlette decodes form values leniently, so a value like `%ff%fe` would
    otherwise reach the handler as U+FFFD characters.

    Raises:
        ClientDecodeError: Raw or percent-encoded bytes are not valid UTF-8.
    """
    try:
        parse_qsl(body.decode("utf-8"), keep_blank_values=True, errors="strict")
    except UnicodeDecodeError as e:
        raise ClientDecodeError(context={"reason": "invalid UTF-8", "position": e.start}) from e


async def decode_post_form(request: Request, form_cls: Type[FormT]) -> FormT:
    """
    Parse the request body and bind it to `form_cls`.

    Raises:
        ClientDecodeError: The body could not be parsed or bound.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/x-www-form-urlencoded":
        # The body is cached on the request, so request.form() below reuses it
        check_urlencoded_utf8(await request.body())

    try:
        form_data = await request.form()
    except Exception as e:
        # Starlette reports malformed multipart bodies in a few different ways
        raise ClientDecodeError(context={"reason": type(e).__name__}) from e

    try:
        return bind_form(form_cls, form_data.multi_items())
    finally:
        await form_data.close()
