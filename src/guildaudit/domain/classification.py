"""Classification of raw action codes into families, verbs and names."""

from __future__ import annotations

from logging import getLogger
from typing import Final

from guildaudit.domain.model.enums import ActionFamily, ActionVerb, AuditAction

log = getLogger(__name__)

# Upper bounds are exclusive; checked in ascending order.
_FAMILY_RANGES: Final[tuple[tuple[int, ActionFamily], ...]] = (
    (10, ActionFamily.GUILD),
    (20, ActionFamily.CHANNEL),
    (30, ActionFamily.USER),
    (40, ActionFamily.ROLE),
    (50, ActionFamily.INVITE),
    (60, ActionFamily.WEBHOOK),
    (70, ActionFamily.EMOJI),
    (80, ActionFamily.MESSAGE),
    (90, ActionFamily.INTEGRATION),
)

CREATE_ACTIONS: Final[frozenset[int]] = frozenset(
    {
        AuditAction.CHANNEL_CREATE,
        AuditAction.CHANNEL_OVERWRITE_CREATE,
        AuditAction.MEMBER_BAN_REMOVE,
        AuditAction.BOT_ADD,
        AuditAction.ROLE_CREATE,
        AuditAction.INVITE_CREATE,
        AuditAction.WEBHOOK_CREATE,
        AuditAction.EMOJI_CREATE,
        AuditAction.MESSAGE_PIN,
        AuditAction.INTEGRATION_CREATE,
    }
)

DELETE_ACTIONS: Final[frozenset[int]] = frozenset(
    {
        AuditAction.CHANNEL_DELETE,
        AuditAction.CHANNEL_OVERWRITE_DELETE,
        AuditAction.MEMBER_KICK,
        AuditAction.MEMBER_PRUNE,
        AuditAction.MEMBER_BAN_ADD,
        AuditAction.MEMBER_DISCONNECT,
        AuditAction.ROLE_DELETE,
        AuditAction.INVITE_DELETE,
        AuditAction.WEBHOOK_DELETE,
        AuditAction.EMOJI_DELETE,
        AuditAction.MESSAGE_DELETE,
        AuditAction.MESSAGE_BULK_DELETE,
        AuditAction.MESSAGE_UNPIN,
        AuditAction.INTEGRATION_DELETE,
    }
)

UPDATE_ACTIONS: Final[frozenset[int]] = frozenset(
    {
        AuditAction.GUILD_UPDATE,
        AuditAction.CHANNEL_UPDATE,
        AuditAction.CHANNEL_OVERWRITE_UPDATE,
        AuditAction.MEMBER_UPDATE,
        AuditAction.MEMBER_ROLE_UPDATE,
        AuditAction.MEMBER_MOVE,
        AuditAction.ROLE_UPDATE,
        AuditAction.INVITE_UPDATE,
        AuditAction.WEBHOOK_UPDATE,
        AuditAction.EMOJI_UPDATE,
        AuditAction.INTEGRATION_UPDATE,
    }
)

_VERB_SETS: Final[tuple[tuple[frozenset[int], ActionVerb], ...]] = (
    (CREATE_ACTIONS, ActionVerb.CREATE),
    (DELETE_ACTIONS, ActionVerb.DELETE),
    (UPDATE_ACTIONS, ActionVerb.UPDATE),
)


def target_family_from_action_code(code: int | None) -> ActionFamily | None:
    """Return the family an action code belongs to, or ``None`` when unmapped."""

    if code is None:
        return None
    for upper_bound, family in _FAMILY_RANGES:
        if code < upper_bound:
            return family
    return None


def action_verb_from_action_code(code: int | None) -> ActionVerb:
    for members, verb in _VERB_SETS:
        if code in members:
            return verb
    return ActionVerb.ALL


def action_name_from_action_code(code: int | None) -> str | None:
    if code is None:
        return None
    try:
        return AuditAction(code).name
    except ValueError:
        log.debug("Unmapped audit log action code %s", code)
        return None


__all__ = [
    "CREATE_ACTIONS",
    "DELETE_ACTIONS",
    "UPDATE_ACTIONS",
    "action_name_from_action_code",
    "action_verb_from_action_code",
    "target_family_from_action_code",
]
