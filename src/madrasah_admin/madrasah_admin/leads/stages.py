from __future__ import annotations

from typing import Optional

from ..core.enums import LeadEmailStage
from ..core.exceptions import ValidationError

STAGE_ORDER: tuple[LeadEmailStage, ...] = (
    LeadEmailStage.INITIAL,
    LeadEmailStage.FOLLOW_UP_1,
    LeadEmailStage.FOLLOW_UP_2,
    LeadEmailStage.FINAL,
)

STAGE_LABELS = {
    LeadEmailStage.INITIAL: "Initial",
    LeadEmailStage.FOLLOW_UP_1: "Follow-up 1",
    LeadEmailStage.FOLLOW_UP_2: "Follow-up 2",
    LeadEmailStage.FINAL: "Final",
}

CUSTOM_TEMPLATE = "CUSTOM"


def next_stage(current: Optional[LeadEmailStage]) -> Optional[LeadEmailStage]:
    """Stage that follows `current`; None before the first send means INITIAL,
    and None after FINAL means outreach is complete."""
    if current is None:
        return STAGE_ORDER[0]
    index = STAGE_ORDER.index(current)
    if index + 1 < len(STAGE_ORDER):
        return STAGE_ORDER[index + 1]
    return None


def stage_index(stage: Optional[LeadEmailStage]) -> int:
    return -1 if stage is None else STAGE_ORDER.index(stage)


def has_been_sent(current: Optional[LeadEmailStage], template: LeadEmailStage) -> bool:
    return stage_index(current) >= stage_index(template)


def parse_template(value: Optional[str]) -> Optional[LeadEmailStage]:
    """Map a template name to its stage. CUSTOM (or nothing) maps to None."""
    v = (value or "").strip().upper()
    if not v or v == CUSTOM_TEMPLATE:
        return None
    try:
        return LeadEmailStage(v)
    except ValueError:
        raise ValidationError(f"Unknown email template: {value!r}")
