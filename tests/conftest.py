import random

import pytest

from teamroping.competition import Competition
from teamroping.controllers.rule_table import HandicapRuleTable
from teamroping.models.competition import EventSettings, Pair
from teamroping.models.competitor import Competitor
from teamroping.models.enums import Modality
from teamroping.models.run_time import RunTime


def make_competitor(cid, handicap=1.0, modality=Modality.BOTH, name=None):
    name = name or f"Roper {cid}"
    return Competitor(
        id=cid,
        full_name=name,
        nickname=name.split()[-1],
        modality=modality,
        handicap=handicap,
    )


def make_pair(pid, head_id, heel_id, runs=2, head_hc=1.0, heel_hc=1.0):
    pair = Pair.create(
        make_competitor(head_id, head_hc, Modality.HEAD),
        make_competitor(heel_id, heel_hc, Modality.HEEL),
        runs,
        pair_id=pid,
    )
    return pair


def times(*values):
    """Build run slots: None -> unset, "SAT" -> marker, numbers -> numeric."""
    return [RunTime.from_json(v) for v in values]


@pytest.fixture
def rng():
    return random.Random(20250614)


@pytest.fixture
def rule_table():
    return HandicapRuleTable.from_pairs([(3.5, 1), (4.5, 2), (6.5, 3), (100, 4)])


@pytest.fixture
def roster():
    return [
        make_competitor("ana", 1.0, Modality.HEAD),
        make_competitor("bia", 2.0, Modality.HEAD),
        make_competitor("caio", 3.0, Modality.BOTH),
        make_competitor("davi", 1.5, Modality.HEEL),
        make_competitor("edu", 2.5, Modality.HEEL),
    ]


@pytest.fixture
def competition(roster, rule_table, rng):
    return Competition(
        settings=EventSettings(event_name="Copa do Laço", time_limit=15, max_handicap=7),
        rule_table=rule_table,
        competitors=roster,
        rng=rng,
    )
