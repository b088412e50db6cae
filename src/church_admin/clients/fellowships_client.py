from __future__ import annotations

from dataclasses import dataclass

from ..models import FellowshipListResponse, FellowshipQuery
from .base import ListClient


@dataclass
class FellowshipsClient(ListClient[FellowshipQuery]):
    path = "/fellowships"
    query_model = FellowshipQuery
    response_model = FellowshipListResponse
