"""
Snippetbox — Pydantic Schemas
===============================

What:  Pydantic models for the data that crosses layer boundaries.
Why:   The store hands routes immutable values instead of live ORM objects,
       and the create form is a typed object rather than a raw form dict.

    SnippetRead        what the store returns; what the templates display
    SnippetCreateForm  the decoded POST /snippet/create body plus its Validator
    HealthResponse     GET /health payload
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from snippetbox.validator import Validator


class SnippetRead(BaseModel):
    """
    A live snippet as read from the store.

    Timestamps are always timezone-aware UTC. SQLite hands back naive values
    for TIMESTAMP columns; those are stored as UTC, so they are tagged as such.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int = Field(description="Store-assigned identifier")
    title: str
    content: str
    created: datetime = Field(description="Creation time (UTC)")
    expires: datetime = Field(description="Expiry time (UTC)")

    @field_validator("created", "expires")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class SnippetCreateForm(BaseModel):
    """
    Create-snippet form.

    Missing fields fall back to the defaults below, so an empty POST decodes
    fine and is then rejected by validation with a 422. A value of the wrong
    type (expires=abc) fails decoding instead and becomes a 400.

    The validator is composed as a named field. It is never filled from the
    request body (the form binder skips it).
    """

    title: str = ""
    content: str = ""
    expires: int = 0

    validator: Validator = Field(default_factory=Validator)

    @property
    def valid(self) -> bool:
        return self.validator.valid


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
