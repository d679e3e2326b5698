import pytest

from madrasah_admin.core.enums import LeadEmailStage
from madrasah_admin.core.exceptions import ValidationError
from madrasah_admin.leads.stages import has_been_sent, next_stage, parse_template


def test_next_stage_walks_the_sequence():
    assert next_stage(None) == LeadEmailStage.INITIAL
    assert next_stage(LeadEmailStage.INITIAL) == LeadEmailStage.FOLLOW_UP_1
    assert next_stage(LeadEmailStage.FOLLOW_UP_1) == LeadEmailStage.FOLLOW_UP_2
    assert next_stage(LeadEmailStage.FOLLOW_UP_2) == LeadEmailStage.FINAL
    assert next_stage(LeadEmailStage.FINAL) is None


def test_next_stage_is_defined_for_every_stage():
    for stage in LeadEmailStage:
        next_stage(stage)


def test_has_been_sent():
    assert not has_been_sent(None, LeadEmailStage.INITIAL)
    assert has_been_sent(LeadEmailStage.FOLLOW_UP_1, LeadEmailStage.INITIAL)
    assert has_been_sent(LeadEmailStage.FOLLOW_UP_1, LeadEmailStage.FOLLOW_UP_1)
    assert not has_been_sent(LeadEmailStage.FOLLOW_UP_1, LeadEmailStage.FINAL)


def test_parse_template():
    assert parse_template("follow_up_2") == LeadEmailStage.FOLLOW_UP_2
    assert parse_template("CUSTOM") is None
    assert parse_template(None) is None
    with pytest.raises(ValidationError):
        parse_template("REMINDER")
