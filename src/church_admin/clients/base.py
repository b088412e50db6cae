from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from pydantic import BaseModel

from ..http_client import HttpClient
from ..models import ListPage, ListQuery

QueryT = TypeVar("QueryT", bound=ListQuery)


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return await self.http.request(method, path, headers=merged, **kwargs)


@dataclass
class ListClient(BaseClient, Generic[QueryT]):
    """Range-paginated collection endpoint answering ``{results, total}``."""

    path: ClassVar[str]
    query_model: ClassVar[type[ListQuery]]
    response_model: ClassVar[type[BaseModel]]

    async def list(self, params: Mapping[str, Any]) -> ListPage:
        query = self.query_model.model_validate(dict(params))
        payload = await self._request("GET", self.path, params=query.to_params())
        if not isinstance(payload, dict):
            raise ValueError(f"Expected {self.path} listing response to be a JSON object")
        response = self.response_model.model_validate(payload)
        return ListPage(rows=list(response.results), total=response.total)

    async def delete(self, row_id: str) -> None:
        await self._request("DELETE", f"{self.path}/{row_id}")
