"""
Snippetbox — Snippet Route Handlers
=====================================

What:  The four pages of the application.
           GET  /                    latest live snippets
           GET  /snippet/view/{id}   one live snippet
           GET  /snippet/create      empty create form
           POST /snippet/create      validate, insert, flash, redirect
How:   Handlers read and validate input, call the SnippetStore and render a
       template or redirect. NotFoundError, ClientDecodeError and StorageError
       propagate to the global exception handlers in main.py.

Create flow (POST):
    decode ──fail──▶ 400
      │
    validate ──fail──▶ 422, form re-rendered with the submitted values
      │
    insert ──fail──▶ 500
      │
    flash + 303 ──▶ /snippet/view/{id}
"""

import re

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from snippetbox.dependencies import get_snippet_store
from snippetbox.exceptions import NotFoundError
from snippetbox.forms import decode_post_form
from snippetbox.schemas.snippet import SnippetCreateForm
from snippetbox.services.snippet_store import SnippetStore
from snippetbox.templating import FLASH_KEY, render
from snippetbox.validator import max_chars, not_blank, permitted_int


router = APIRouter(tags=["Snippets"])

DEFAULT_EXPIRES = 365
PERMITTED_EXPIRES = (1, 7, 365)
TITLE_MAX_CHARS = 100

# Largest id the INTEGER primary key can hold
MAX_SNIPPET_ID = 2**31 - 1

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_snippet_id(raw: str) -> int:
    """
    Parse the {id} path segment.

    Raises:
        NotFoundError: Not a decimal integer, or outside 1..MAX_SNIPPET_ID.
    """
    if not _ID_PATTERN.fullmatch(raw):
        raise NotFoundError(resource="snippet", resource_id=raw)
    snippet_id = int(raw)
    if snippet_id < 1 or snippet_id > MAX_SNIPPET_ID:
        raise NotFoundError(resource="snippet", resource_id=raw)
    return snippet_id


def check_create_form(form: SnippetCreateForm) -> None:
    """Run every create-form rule; failures are recorded on form.validator."""
    v = form.validator
    v.check_field(not_blank(form.title), "title", "This field cannot be blank")
    v.check_field(
        max_chars(form.title, TITLE_MAX_CHARS),
        "title",
        f"This field cannot be more than {TITLE_MAX_CHARS} characters long",
    )
    v.check_field(not_blank(form.content), "content", "This field cannot be blank")
    v.check_field(
        permitted_int(form.expires, *PERMITTED_EXPIRES),
        "expires",
        "This field must equal 1, 7 or 365",
    )


@router.get("/", response_class=HTMLResponse, summary="Latest snippets")
async def home(
    request: Request,
    store: SnippetStore = Depends(get_snippet_store),
) -> Response:
    snippets = await store.latest()
    return render(request, "home.html", snippets=snippets)


@router.get(
    "/snippet/view/{snippet_id}",
    response_class=HTMLResponse,
    summary="View a snippet",
)
async def snippet_view(
    request: Request,
    snippet_id: str,
    store: SnippetStore = Depends(get_snippet_store),
) -> Response:
    """
    Show one live snippet.

    The id is parsed here rather than by FastAPI so that a malformed or
    non-positive id is a 404 (never a 422) and never reaches the store.
    """
    snippet = await store.get(parse_snippet_id(snippet_id))
    return render(request, "view.html", snippet=snippet)


@router.get("/snippet/create", response_class=HTMLResponse, summary="Create form")
async def snippet_create(request: Request) -> Response:
    form = SnippetCreateForm(expires=DEFAULT_EXPIRES)
    return render(request, "create.html", form=form)


@router.post("/snippet/create", summary="Create a snippet")
async def snippet_create_post(
    request: Request,
    store: SnippetStore = Depends(get_snippet_store),
) -> Response:
    """
    Validate the submitted form and create the snippet.

    Returns:
        303 redirect to the new snippet on success, or the create form
        re-rendered with status 422 and the submitted values on failure.
    """
    form = await decode_post_form(request, SnippetCreateForm)

    check_create_form(form)
    if not form.valid:
        return render(request, "create.html", status_code=422, form=form)

    snippet_id = await store.insert(form.title, form.content, form.expires)

    request.session[FLASH_KEY] = "Snippet successfully created!"

    return RedirectResponse(url=f"/snippet/view/{snippet_id}", status_code=303)
