from __future__ import annotations

from datetime import datetime, time

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EntityId = int | str


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class HealthCenterDto(ApiModel):
    id: EntityId
    name: str = ""


class RegionDto(ApiModel):
    id: EntityId
    name: str = ""
    health_center_id: EntityId | None = None
    health_center_name: str | None = None


class RoomDto(ApiModel):
    id: EntityId
    name: str = ""


class OfficeDto(ApiModel):
    id: EntityId
    name: str = ""
    region_id: EntityId | None = None
    region_name: str | None = None
    time_zone_iana: str | None = None
    room_ids: list[EntityId] = Field(default_factory=list)
    begin_time: int = 0  # ticks since local midnight
    end_time: int = 0


class AuditLogDto(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: EntityId
    change_date: datetime | None = None
    user_name: str | None = None
    entity_name: str | None = None
    change_type: str | None = None


# Drafts hold pending create/edit input; payload builders turn them into wire dicts.


class OfficeDraft(ApiModel):
    name: str = ""
    region_id: EntityId | None = None
    time_zone_iana: str | None = None
    room_ids: list[EntityId] = Field(default_factory=list)
    begin_time: time | None = None
    end_time: time | None = None


class RegionDraft(ApiModel):
    name: str = ""
    health_center_id: EntityId | None = None


class RoomDraft(ApiModel):
    name: str = ""
