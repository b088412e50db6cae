from __future__ import annotations

from dataclasses import dataclass

from ..models import MemberListResponse, MemberQuery
from .base import ListClient


@dataclass
class MembersClient(ListClient[MemberQuery]):
    path = "/members"
    query_model = MemberQuery
    response_model = MemberListResponse
