from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from facility_console.application.dto.query_dto import PageResult, QueryParams
from facility_console.config import REFERENCE_PAGE_SIZE
from facility_console.infrastructure.api.client import ApiClient


class ResourceService:
    """CRUD gateway for one remote application service (Office, Region, ...)."""

    def __init__(
        self,
        client: ApiClient,
        endpoint: str,
        entity_model: type[BaseModel] | None = None,
    ) -> None:
        self.client = client
        self.endpoint = endpoint
        self.entity_model = entity_model
        self._logger = logging.getLogger(__name__)

    def _path(self, action: str) -> str:
        return f"api/services/app/{self.endpoint}/{action}"

    def _parse(self, raw: Any) -> Any:
        if self.entity_model is None or raw is None:
            return raw
        return self.entity_model.model_validate(raw)

    def _page(self, raw: Any) -> PageResult:
        raw = raw or {}
        items = [self._parse(item) for item in raw.get("items") or []]
        total = raw.get("totalCount")
        return PageResult(items=items, total_count=int(total) if total is not None else len(items))

    def list(self, query: QueryParams) -> PageResult:
        raw = self.client.get(self._path("GetAll"), params=query.to_request())
        page = self._page(raw)
        self._logger.debug(
            "%s list: skip=%s take=%s filter=%r -> %s/%s",
            self.endpoint,
            query.skip_count,
            query.max_result_count,
            query.filter,
            len(page.items),
            page.total_count,
        )
        return page

    def list_reference(self, max_result_count: int = REFERENCE_PAGE_SIZE) -> list[Any]:
        # dropdown sources are assumed smaller than one oversized page
        raw = self.client.get(
            self._path("GetAll"),
            params={"SkipCount": 0, "MaxResultCount": max_result_count},
        )
        return self._page(raw).items

    def get(self, entity_id: Any) -> Any:
        return self._parse(self.client.get(self._path("Get"), params={"Id": entity_id}))

    def create(self, payload: dict[str, Any]) -> Any:
        created = self._parse(self.client.post(self._path("Create"), json=payload))
        self._logger.info("%s created", self.endpoint)
        return created

    def update(self, entity_id: Any, payload: dict[str, Any]) -> Any:
        updated = self._parse(self.client.put(self._path("Update"), json={**payload, "id": entity_id}))
        self._logger.info("%s %s updated", self.endpoint, entity_id)
        return updated

    def delete(self, entity_id: Any) -> None:
        self.client.delete(self._path("Delete"), params={"Id": entity_id})
        self._logger.info("%s %s deleted", self.endpoint, entity_id)
