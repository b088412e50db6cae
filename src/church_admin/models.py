from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Hashable, Protocol, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class HasId(Protocol):
    @property
    def id(self) -> Hashable: ...


RowT = TypeVar("RowT", bound=HasId)


@dataclass(frozen=True)
class ListPage(Generic[RowT]):
    """One window of rows plus the authoritative count for the active filters."""

    rows: Sequence[RowT]
    total: int


class ListQuery(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    range_start: int = Field(alias="rangeStart", ge=0)
    range_end: int = Field(alias="rangeEnd", ge=0)
    eager: str | None = None
    order_by: str | None = Field(default=None, alias="orderBy")
    order_by_desc: str | None = Field(default=None, alias="orderByDesc")

    def to_params(self) -> dict[str, Any]:
        params = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        return {key: int(value) if isinstance(value, bool) else value for key, value in params.items()}


class MemberQuery(ListQuery):
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    fellowship_id: str | None = Field(default=None, alias="fellowshipId")
    is_baptized: bool | None = Field(default=None, alias="isBaptized")
    attends_fellowship: bool | None = Field(default=None, alias="attendsFellowship")


class FellowshipQuery(ListQuery):
    name: str | None = None
    chairman_id: str | None = Field(default=None, alias="chairmanId")
    secretary_id: str | None = Field(default=None, alias="secretaryId")
    has_leadership: bool | None = Field(default=None, alias="hasLeadership")
    has_members: bool | None = Field(default=None, alias="hasMembers")


class VolunteerOpportunityQuery(ListQuery):
    name: str | None = None


class FellowshipSummary(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str | None = None


class Member(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email: str | None = None
    phone: str | None = None
    fellowship_id: str | None = Field(default=None, alias="fellowshipId")
    fellowship: FellowshipSummary | None = None
    is_baptized: bool | None = Field(default=None, alias="isBaptized")
    attends_fellowship: bool | None = Field(default=None, alias="attendsFellowship")
    created_at: datetime | None = Field(default=None, alias="createdAt")


class MemberSummary(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")


class Fellowship(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str
    notes: str | None = None
    chairman: MemberSummary | None = None
    deputy_chairman: MemberSummary | None = Field(default=None, alias="deputyChairman")
    secretary: MemberSummary | None = None
    treasurer: MemberSummary | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")


class VolunteerOpportunity(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str
    description: str | None = None


class MemberListResponse(BaseModel):
    results: list[Member]
    total: int = Field(ge=0)


class FellowshipListResponse(BaseModel):
    results: list[Fellowship]
    total: int = Field(ge=0)


class VolunteerOpportunityListResponse(BaseModel):
    results: list[VolunteerOpportunity]
    total: int = Field(ge=0)


class PermissionEntry(BaseModel):
    key: str
    allowed: bool = True
    source: str | None = None
