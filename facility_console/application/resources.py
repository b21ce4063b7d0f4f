from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

from pydantic import BaseModel

from facility_console.application.dto.facility_dto import (
    AuditLogDto,
    HealthCenterDto,
    OfficeDraft,
    OfficeDto,
    RegionDraft,
    RegionDto,
    RoomDraft,
    RoomDto,
)
from facility_console.application.dto.query_dto import Option
from facility_console.domain.constants import US_TIME_ZONES
from facility_console.domain.office_hours import decode_office_hours, encode_office_hours

OFFICE: Final = "office"
REGION: Final = "region"
ROOM: Final = "room"
HEALTH_CENTER: Final = "health-center"
AUDIT_LOG: Final = "audit-log"


@dataclass(frozen=True)
class ReferenceSource:
    """Where a dropdown gets its options: another resource kind or a fixed list."""

    kind: str | None = None
    multi: bool = False
    static_options: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class Column:
    attr: str
    header: str
    sort_key: str | None = None


def name_option(item: Any) -> Option:
    return Option(id=item.id, text=item.name)


def draft_payload(draft: BaseModel) -> dict[str, Any]:
    return draft.model_dump(by_alias=True, mode="json")


def office_payload(draft: OfficeDraft) -> dict[str, Any]:
    begin, end = encode_office_hours(draft.begin_time, draft.end_time)
    payload = draft.model_dump(by_alias=True, mode="json", exclude={"begin_time", "end_time"})
    payload["beginTime"] = begin
    payload["endTime"] = end
    return payload


def office_draft(entity: Any) -> OfficeDraft:
    begin, end = decode_office_hours(entity.begin_time, entity.end_time)
    return OfficeDraft(
        name=entity.name,
        region_id=entity.region_id,
        time_zone_iana=entity.time_zone_iana,
        room_ids=list(entity.room_ids),
        begin_time=begin,
        end_time=end,
    )


def region_draft(entity: Any) -> RegionDraft:
    return RegionDraft(name=entity.name, health_center_id=entity.health_center_id)


def room_draft(entity: Any) -> RoomDraft:
    return RoomDraft(name=entity.name)


@dataclass(frozen=True)
class ResourceConfig:
    kind: str
    title: str
    singular: str
    endpoint: str
    entity_model: type[BaseModel]
    columns: tuple[Column, ...]
    default_sort: str = "Name ASC"
    draft_model: type[BaseModel] | None = None
    required_fields: tuple[str, ...] = ()
    references: Mapping[str, ReferenceSource] = field(default_factory=dict)
    map_to_option: Callable[[Any], Option] = name_option
    payload_builder: Callable[[Any], dict[str, Any]] = draft_payload
    draft_from_entity: Callable[[Any], BaseModel] | None = None
    read_only: bool = False

    @property
    def is_mutable(self) -> bool:
        return not self.read_only and self.draft_model is not None

    def empty_draft(self) -> BaseModel:
        if self.draft_model is None:
            raise TypeError(f"{self.kind} has no draft model")
        return self.draft_model()


_RESOURCES: dict[str, ResourceConfig] = {
    OFFICE: ResourceConfig(
        kind=OFFICE,
        title="Offices",
        singular="office",
        endpoint="Office",
        entity_model=OfficeDto,
        columns=(
            Column("name", "Name", "Name"),
            Column("region_name", "Region"),
            Column("time_zone_iana", "Time Zone", "TimeZoneIana"),
        ),
        draft_model=OfficeDraft,
        required_fields=("region_id", "name", "time_zone_iana"),
        references={
            "region_id": ReferenceSource(kind=REGION),
            "room_ids": ReferenceSource(kind=ROOM, multi=True),
            "time_zone_iana": ReferenceSource(static_options=US_TIME_ZONES),
        },
        payload_builder=office_payload,
        draft_from_entity=office_draft,
    ),
    REGION: ResourceConfig(
        kind=REGION,
        title="Regions",
        singular="region",
        endpoint="Region",
        entity_model=RegionDto,
        columns=(
            Column("name", "Name", "Name"),
            Column("health_center_name", "Health Center"),
        ),
        draft_model=RegionDraft,
        required_fields=("health_center_id", "name"),
        references={"health_center_id": ReferenceSource(kind=HEALTH_CENTER)},
        draft_from_entity=region_draft,
    ),
    ROOM: ResourceConfig(
        kind=ROOM,
        title="Rooms",
        singular="room",
        endpoint="Room",
        entity_model=RoomDto,
        columns=(Column("name", "Name", "Name"),),
        draft_model=RoomDraft,
        required_fields=("name",),
        draft_from_entity=room_draft,
    ),
    HEALTH_CENTER: ResourceConfig(
        kind=HEALTH_CENTER,
        title="Health Centers",
        singular="health center",
        endpoint="HealthCenter",
        entity_model=HealthCenterDto,
        columns=(Column("name", "Name", "Name"),),
        read_only=True,
    ),
    AUDIT_LOG: ResourceConfig(
        kind=AUDIT_LOG,
        title="Audit Logs",
        singular="audit log",
        endpoint="AuditLog",
        entity_model=AuditLogDto,
        columns=(
            Column("change_date", "Date", "ChangeDate"),
            Column("user_name", "User", "UserName"),
            Column("entity_name", "Entity", "EntityName"),
            Column("change_type", "Change", "ChangeType"),
        ),
        default_sort="ChangeDate DESC",
        read_only=True,
    ),
}

RESOURCES: Mapping[str, ResourceConfig] = MappingProxyType(_RESOURCES)


def get_resource(kind: str) -> ResourceConfig:
    try:
        return RESOURCES[kind]
    except KeyError:
        raise KeyError(f"Unknown resource kind: {kind}") from None
