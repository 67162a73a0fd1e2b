"""Pydantic models describing a raw audit log batch payload."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _snowflake_to_str(value: object) -> object:
    # Ids arrive as strings on the wire but as ints from some serialisers.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _blank_to_none(value)


def _option_to_str(value: object) -> str | None:
    # Options are strings on the wire. Other scalars become text, anything else is dropped.
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


class AuditLogBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UserPayload(AuditLogBaseModel):
    id: str
    username: str | None = None
    discriminator: str | None = None
    avatar: str | None = None
    bot: bool = False

    _normalize_id = field_validator("id", mode="before")(_snowflake_to_str)


class ChangePayload(AuditLogBaseModel):
    key: str
    old_value: Any = None
    new_value: Any = None


class AuditLogOptionsPayload(AuditLogBaseModel):
    """Action-specific detail; every field is a string on the wire."""

    members_removed: str | None = None
    delete_member_days: str | None = None
    channel_id: str | None = None
    message_id: str | None = None
    count: str | None = None
    id: str | None = None
    type: str | None = None
    role_name: str | None = None

    _normalize_values = field_validator(
        "members_removed",
        "delete_member_days",
        "channel_id",
        "message_id",
        "count",
        "id",
        "type",
        "role_name",
        mode="before",
    )(_option_to_str)


class AuditLogEntryPayload(AuditLogBaseModel):
    id: str
    action_type: int | None = None
    user_id: str | None = None
    target_id: str | None = None
    reason: str | None = None
    changes: list[ChangePayload] | None = None
    options: AuditLogOptionsPayload | None = None

    _normalize_ids = field_validator("id", "user_id", "target_id", mode="before")(
        _snowflake_to_str
    )

    @field_validator("options", mode="before")
    @classmethod
    def _drop_malformed_options(cls, value: object) -> object:
        if value is None or isinstance(value, Mapping | AuditLogOptionsPayload):
            return value
        return None


class WebhookPayload(AuditLogBaseModel):
    id: str | None = None
    guild_id: str | None = None
    channel_id: str | None = None
    name: str | None = None
    avatar: str | None = None
    token: str | None = None
    type: int | None = None
    user: UserPayload | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_change_keys(cls, value: object) -> object:
        # Webhook changes report the avatar under ``avatar_hash``.
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            if "avatar_hash" in mapping_value and "avatar" not in mapping_value:
                data: dict[str, object] = dict(mapping_value)
                data["avatar"] = data.pop("avatar_hash")
                return data
            return mapping_value
        return value

    _normalize_ids = field_validator("id", "guild_id", "channel_id", mode="before")(
        _snowflake_to_str
    )


class IntegrationAccountPayload(AuditLogBaseModel):
    id: str | None = None
    name: str | None = None

    _normalize_id = field_validator("id", mode="before")(_snowflake_to_str)


class IntegrationPayload(AuditLogBaseModel):
    id: str | None = None
    name: str | None = None
    type: str | None = None
    enabled: bool | None = None
    syncing: bool | None = None
    role_id: str | None = None
    expire_behavior: int | None = None
    expire_grace_period: int | None = None
    account: IntegrationAccountPayload | None = None
    user: UserPayload | None = None

    _normalize_ids = field_validator("id", "role_id", mode="before")(_snowflake_to_str)


class InvitePayload(AuditLogBaseModel):
    id: str | None = None
    code: str | None = None
    channel_id: str | None = None
    inviter_id: str | None = None
    max_age: int | None = None
    max_uses: int | None = None
    uses: int | None = None
    temporary: bool | None = None

    _normalize_ids = field_validator("id", "channel_id", "inviter_id", mode="before")(
        _snowflake_to_str
    )


class AuditLogPayload(AuditLogBaseModel):
    audit_log_entries: list[AuditLogEntryPayload]
    users: list[UserPayload] = Field(default_factory=list["UserPayload"])
    webhooks: list[WebhookPayload] = Field(default_factory=list["WebhookPayload"])
    integrations: list[IntegrationPayload] = Field(default_factory=list["IntegrationPayload"])

    @field_validator("users", "webhooks", "integrations", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return [] if value is None else value


AuditLogPayloadInput = AuditLogPayload | Mapping[str, object]
AuditLogEntryPayloadInput = AuditLogEntryPayload | Mapping[str, object]
