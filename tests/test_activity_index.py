"""
Tests for the team activity index.

Project TeamAudit
Copyright (C) 2024-2025 Tony Mason

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published
by the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

import datetime
import os
import sys

import pytest

current_path = os.path.dirname(os.path.abspath(__file__))
while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
    current_path = os.path.dirname(current_path)
sys.path.append(current_path)
os.environ["TEAMAUDIT_ROOT"] = current_path

# pylint: disable=wrong-import-position
from activity import ActivityIndex, inactivity_cutoff
from data_models import ActivityRecord
from storage.collectors.cloud import GraphAuthenticationError


def test_last_row_wins_on_duplicate_team_ids():
    index = ActivityIndex.build([
        ActivityRecord(team_id="t1", last_activity_date="2024-01-01"),
        ActivityRecord(team_id="t2", last_activity_date="2024-06-01"),
        ActivityRecord(team_id="t1", last_activity_date="2024-12-24"),
    ])
    assert len(index) == 2
    assert index.get("t1") == "2024-12-24"
    assert index.last_activity("t1") == datetime.date(2024, 12, 24)


def test_blank_and_missing_are_distinct_but_both_inactive():
    index = ActivityIndex.build([ActivityRecord(team_id="blank", last_activity_date="")])
    cutoff = datetime.date(2024, 12, 1)
    assert index.has_record("blank")
    assert index.get("blank") == ""
    assert not index.has_record("missing")
    assert index.get("missing") is None
    assert index.is_inactive("blank", cutoff)
    assert index.is_inactive("missing", cutoff)


def test_inactivity_is_relative_to_cutoff():
    index = ActivityIndex.build([
        ActivityRecord(team_id="old", last_activity_date="2024-08-15"),
        ActivityRecord(team_id="edge", last_activity_date="2024-12-01"),
        ActivityRecord(team_id="recent", last_activity_date="2025-02-20"),
        ActivityRecord(team_id="garbled", last_activity_date="not a date"),
    ])
    cutoff = datetime.date(2024, 12, 1)
    assert index.is_inactive("old", cutoff)
    assert not index.is_inactive("edge", cutoff)
    assert not index.is_inactive("recent", cutoff)
    assert index.is_inactive("garbled", cutoff)


def test_index_is_read_only():
    index = ActivityIndex.build([ActivityRecord(team_id="t1", last_activity_date="2024-01-01")])
    with pytest.raises(TypeError):
        index.entries["t1"] = "2025-01-01"  # type: ignore[index]


def test_unavailable_report_yields_empty_index():
    def fetch():
        raise ConnectionError("report endpoint unreachable")

    index = ActivityIndex.from_source(fetch)
    assert len(index) == 0
    assert index.is_inactive("anything", datetime.date(2024, 12, 1))


def test_authentication_failure_is_not_treated_as_missing_report():
    def fetch():
        raise GraphAuthenticationError("invalid_client")

    with pytest.raises(GraphAuthenticationError):
        ActivityIndex.from_source(fetch)


def test_inactivity_cutoff(audit_now):
    assert inactivity_cutoff(90, audit_now) == datetime.date(2024, 12, 1)
    assert inactivity_cutoff(0, audit_now) == datetime.date(2025, 3, 1)
