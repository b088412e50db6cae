from __future__ import annotations

from dataclasses import dataclass

from ..models import VolunteerOpportunityListResponse, VolunteerOpportunityQuery
from .base import ListClient


@dataclass
class VolunteerOpportunitiesClient(ListClient[VolunteerOpportunityQuery]):
    path = "/volunteer-opportunities"
    query_model = VolunteerOpportunityQuery
    response_model = VolunteerOpportunityListResponse
