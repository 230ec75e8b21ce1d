"""Data models for the Redmine tracker."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# An issue exactly as Redmine sent it; the proxy forwards these untouched
RawIssue = dict[str, Any]


class NamedRef(BaseModel):
    """An ``{id, name}`` reference embedded in Redmine payloads."""

    id: int
    name: str = ""


class Project(BaseModel):
    """A Redmine project. Its name may encode a seat number."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str


class Ticket(BaseModel):
    """A Redmine issue as read by the dashboard.

    Only ``id`` and ``project`` are required; a ticket missing the rest still
    marks its seat. Fields not modelled here are kept as extras.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    subject: str = ""
    project: NamedRef
    tracker: NamedRef = Field(default_factory=lambda: NamedRef(id=0))
    status: NamedRef = Field(default_factory=lambda: NamedRef(id=0))
    priority: NamedRef | None = None
    author: NamedRef | None = None
    description: str | None = None
    created_on: str | None = None
    updated_on: str | None = None


class RawIssuePage(BaseModel):
    """A page of unparsed issues with the tracker-reported total."""

    issues: list[RawIssue] = Field(default_factory=list)
    total_count: int = 0


class IssuePage(BaseModel):
    """A page of parsed tickets with the reported total."""

    issues: list[Ticket] = Field(default_factory=list)
    total_count: int = 0
