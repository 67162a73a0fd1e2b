from __future__ import annotations

import pytest

from guildaudit.domain.classification import (
    CREATE_ACTIONS,
    DELETE_ACTIONS,
    UPDATE_ACTIONS,
    action_name_from_action_code,
    action_verb_from_action_code,
    target_family_from_action_code,
)
from guildaudit.domain.model import ActionFamily, ActionVerb, AuditAction

C, D, U = ActionVerb.CREATE, ActionVerb.DELETE, ActionVerb.UPDATE

EXPECTED: dict[AuditAction, tuple[ActionFamily, ActionVerb]] = {
    AuditAction.GUILD_UPDATE: (ActionFamily.GUILD, U),
    AuditAction.CHANNEL_CREATE: (ActionFamily.CHANNEL, C),
    AuditAction.CHANNEL_UPDATE: (ActionFamily.CHANNEL, U),
    AuditAction.CHANNEL_DELETE: (ActionFamily.CHANNEL, D),
    AuditAction.CHANNEL_OVERWRITE_CREATE: (ActionFamily.CHANNEL, C),
    AuditAction.CHANNEL_OVERWRITE_UPDATE: (ActionFamily.CHANNEL, U),
    AuditAction.CHANNEL_OVERWRITE_DELETE: (ActionFamily.CHANNEL, D),
    AuditAction.MEMBER_KICK: (ActionFamily.USER, D),
    AuditAction.MEMBER_PRUNE: (ActionFamily.USER, D),
    AuditAction.MEMBER_BAN_ADD: (ActionFamily.USER, D),
    AuditAction.MEMBER_BAN_REMOVE: (ActionFamily.USER, C),
    AuditAction.MEMBER_UPDATE: (ActionFamily.USER, U),
    AuditAction.MEMBER_ROLE_UPDATE: (ActionFamily.USER, U),
    AuditAction.MEMBER_MOVE: (ActionFamily.USER, U),
    AuditAction.MEMBER_DISCONNECT: (ActionFamily.USER, D),
    AuditAction.BOT_ADD: (ActionFamily.USER, C),
    AuditAction.ROLE_CREATE: (ActionFamily.ROLE, C),
    AuditAction.ROLE_UPDATE: (ActionFamily.ROLE, U),
    AuditAction.ROLE_DELETE: (ActionFamily.ROLE, D),
    AuditAction.INVITE_CREATE: (ActionFamily.INVITE, C),
    AuditAction.INVITE_UPDATE: (ActionFamily.INVITE, U),
    AuditAction.INVITE_DELETE: (ActionFamily.INVITE, D),
    AuditAction.WEBHOOK_CREATE: (ActionFamily.WEBHOOK, C),
    AuditAction.WEBHOOK_UPDATE: (ActionFamily.WEBHOOK, U),
    AuditAction.WEBHOOK_DELETE: (ActionFamily.WEBHOOK, D),
    AuditAction.EMOJI_CREATE: (ActionFamily.EMOJI, C),
    AuditAction.EMOJI_UPDATE: (ActionFamily.EMOJI, U),
    AuditAction.EMOJI_DELETE: (ActionFamily.EMOJI, D),
    AuditAction.MESSAGE_DELETE: (ActionFamily.MESSAGE, D),
    AuditAction.MESSAGE_BULK_DELETE: (ActionFamily.MESSAGE, D),
    AuditAction.MESSAGE_PIN: (ActionFamily.MESSAGE, C),
    AuditAction.MESSAGE_UNPIN: (ActionFamily.MESSAGE, D),
    AuditAction.INTEGRATION_CREATE: (ActionFamily.INTEGRATION, C),
    AuditAction.INTEGRATION_UPDATE: (ActionFamily.INTEGRATION, U),
    AuditAction.INTEGRATION_DELETE: (ActionFamily.INTEGRATION, D),
}


def test_expected_table_covers_every_action() -> None:
    assert set(EXPECTED) == set(AuditAction)


@pytest.mark.parametrize(("action", "expected"), EXPECTED.items(), ids=lambda v: str(v))
def test_known_actions_classify_per_table(
    action: AuditAction, expected: tuple[ActionFamily, ActionVerb]
) -> None:
    family, verb = expected

    assert target_family_from_action_code(action.value) is family
    assert action_verb_from_action_code(action.value) is verb
    assert action_name_from_action_code(action.value) == action.name


def test_action_codes_match_wire_values() -> None:
    assert AuditAction.GUILD_UPDATE == 1
    assert AuditAction.MEMBER_DISCONNECT == 27
    assert AuditAction.BOT_ADD == 28
    assert AuditAction.MESSAGE_DELETE == 72
    assert AuditAction.INTEGRATION_DELETE == 82


def test_guild_update_is_guild_family_update_verb() -> None:
    assert target_family_from_action_code(1) is ActionFamily.GUILD
    assert action_verb_from_action_code(1) is ActionVerb.UPDATE


def test_verb_sets_are_disjoint() -> None:
    assert not CREATE_ACTIONS & DELETE_ACTIONS
    assert not CREATE_ACTIONS & UPDATE_ACTIONS
    assert not DELETE_ACTIONS & UPDATE_ACTIONS
    assert CREATE_ACTIONS | DELETE_ACTIONS | UPDATE_ACTIONS == set(AuditAction)


@pytest.mark.parametrize("code", [9999, 90, 120, None])
def test_unmapped_codes_degrade(code: int | None) -> None:
    assert target_family_from_action_code(code) is None
    assert action_verb_from_action_code(code) is ActionVerb.ALL
    assert action_name_from_action_code(code) is None


def test_unknown_codes_inside_a_range_keep_their_family() -> None:
    # 70 and 71 are not actions, but still fall in the message range.
    assert target_family_from_action_code(70) is ActionFamily.MESSAGE
    assert action_verb_from_action_code(70) is ActionVerb.ALL
    assert action_name_from_action_code(70) is None


def test_range_boundaries_are_half_open() -> None:
    assert target_family_from_action_code(9) is ActionFamily.GUILD
    assert target_family_from_action_code(10) is ActionFamily.CHANNEL
    assert target_family_from_action_code(89) is ActionFamily.INTEGRATION
