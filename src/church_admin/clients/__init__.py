from .base import BaseClient, ListClient
from .fellowships_client import FellowshipsClient
from .members_client import MembersClient
from .volunteers_client import VolunteerOpportunitiesClient

__all__ = [
    "BaseClient",
    "FellowshipsClient",
    "ListClient",
    "MembersClient",
    "VolunteerOpportunitiesClient",
]
