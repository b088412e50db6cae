from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .clients import FellowshipsClient, ListClient, MembersClient, VolunteerOpportunitiesClient
from .services.list_service import ListMessages
from .stores.filter_store import FilterField, FilterStore, SortDirection
from .stores.table_store import TableStore


@dataclass(frozen=True)
class ListDefinition:
    """Static description of one list screen: query shape, capabilities and wording."""

    resource: str
    entity: str
    capability: str
    client_class: type[ListClient]
    filter_fields: tuple[FilterField, ...]
    default_sort: str | None = None
    default_direction: SortDirection = SortDirection.ASC
    eager: str | None = None
    page_size: int | None = None
    delete_capability: str | None = None

    def create_filter_store(self) -> FilterStore:
        return FilterStore(self.filter_fields, self.default_sort, self.default_direction)

    def create_table_store(self, default_page_size: int) -> TableStore[Any]:
        return TableStore(self.resource, self.page_size or default_page_size)

    def messages(self) -> ListMessages:
        return ListMessages.for_entity(self.resource)

    @property
    def label(self) -> str:
        return self.entity.capitalize()


MEMBERS = ListDefinition(
    resource="members",
    entity="member",
    capability="member.findAll",
    client_class=MembersClient,
    delete_capability="member.deleteById",
    filter_fields=(
        FilterField("first_name"),
        FilterField("last_name"),
        FilterField("fellowship_id"),
        FilterField("is_baptized"),
        FilterField("attends_fellowship"),
    ),
    default_sort="first_name",
    eager="fellowship",
)

FELLOWSHIPS = ListDefinition(
    resource="fellowships",
    entity="fellowship",
    capability="fellowship.findAll",
    client_class=FellowshipsClient,
    delete_capability="fellowship.deleteById",
    filter_fields=(
        FilterField("name"),
        FilterField("chairman_id"),
        FilterField("secretary_id"),
        FilterField("has_leadership"),
        FilterField("has_members"),
    ),
    default_sort="name",
    eager="chairman,secretary,treasurer,deputyChairman",
)

VOLUNTEER_OPPORTUNITIES = ListDefinition(
    resource="volunteer opportunities",
    entity="volunteer opportunity",
    capability="opportunity.findAll",
    client_class=VolunteerOpportunitiesClient,
    delete_capability="opportunity.deleteById",
    filter_fields=(FilterField("name"),),
    default_sort="name",
)

LIST_DEFINITIONS = {definition.resource: definition for definition in (MEMBERS, FELLOWSHIPS, VOLUNTEER_OPPORTUNITIES)}
