"""
End to end tests of an audit run against the in-memory directory.

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

import os
import sys

import pytest

current_path = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, current_path)
while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
    current_path = os.path.dirname(current_path)
sys.path.append(current_path)
os.environ["TEAMAUDIT_ROOT"] = current_path

# pylint: disable=wrong-import-position
from audit.team_auditor import TeamAuditor
from data_models import ActivityRecord, AuditSettings, ContentState, StorageItem, TeamDrive
from fake_directory import FakeTeam, FakeTeamDirectorySource, channel, file, folder, person
from storage.collectors.base import DirectoryListingError
from storage.collectors.cloud import GraphAuthenticationError

# 200 days before the fixed clock in conftest
STALE = "2024-08-13"
RECENT = "2025-02-20"


def quiet_team(team_id: str, display_name: str = "Quiet Team") -> FakeTeam:
    general = folder("General")
    design = folder("Design")
    return FakeTeam(
        id=team_id,
        display_name=display_name,
        owners=[person("Adele Vance", "Retail")],
        members=[person("Alex Wilber", "Marketing"), person("Diego Siciliani", "HR"), person("Grady Archie", "HR")],
        channels=[channel("General"), channel("Design")],
        drive=TeamDrive(size=0, web_url=f"https://contoso.sharepoint.com/sites/{team_id}/Shared%20Documents"),
        root_items=[general, design],
    )


def run(source, audit_now, **settings):
    return TeamAuditor(source, AuditSettings(**settings), now=audit_now).run()


def test_team_without_people_is_deletable(source, audit_now):
    source.add_team(FakeTeam(id="empty", display_name="Ghost Town",
                             channels=[channel("General")],
                             root_items=[file("keep.docx")]))
    source.activity = [ActivityRecord(team_id="empty", last_activity_date=RECENT)]
    report = run(source, audit_now)
    (summary,) = report.summaries
    assert summary.safe_to_delete
    assert "no members or owners" in summary.reason
    assert summary.to_export_record()["Safe To Delete"] == "Yes"


def test_inactive_empty_team_is_deletable(source, audit_now):
    source.add_team(quiet_team("quiet"))
    source.activity = [ActivityRecord(team_id="quiet", last_activity_date=STALE)]
    report = run(source, audit_now)
    (summary,) = report.summaries
    assert summary.safe_to_delete
    assert summary.reason == "Team is inactive and contains no files."
    assert not summary.has_any_data
    assert summary.member_count == 3
    assert summary.owner_count == 1
    assert summary.last_activity == STALE
    assert summary.departments == "Marketing; HR"
    assert [d.has_content for d in report.details] == [ContentState.NO, ContentState.NO]


def test_inactive_team_with_files_is_kept(source, audit_now):
    team = source.add_team(quiet_team("files"))
    design = next(item for item in team.root_items if item.name == "Design")
    team.root_items = [team.root_items[0], folder("Design", child_count=2, size=4096)]
    team.folder_children = {design.id: [file("brief.docx"), file("plan.xlsx")]}
    source.activity = [ActivityRecord(team_id="files", last_activity_date=STALE)]
    report = run(source, audit_now)
    (summary,) = report.summaries
    assert not summary.safe_to_delete
    assert "contains files or needs review" in summary.reason
    rows = {d.channel_name: d for d in report.details}
    assert rows["Design"].has_content == ContentState.YES
    assert rows["General"].has_content == ContentState.NO


def test_private_channel_failure_is_isolated(source, audit_now):
    team = source.add_team(quiet_team("private"))
    leadership = channel("Leadership", "private")
    team.channels = team.channels + [leadership]
    team.private_roots = {leadership.id: RuntimeError("drive root lookup failed")}
    source.activity = [ActivityRecord(team_id="private", last_activity_date=RECENT)]
    report = run(source, audit_now)
    rows = {d.channel_name: d for d in report.details}
    assert rows["Leadership"].has_content == ContentState.ERROR
    assert rows["Leadership"].channel_size == "Error"
    assert rows["General"].has_content == ContentState.NO
    assert rows["Design"].has_content == ContentState.NO
    (summary,) = report.summaries
    assert summary.reason == "Team has recent activity."
    assert summary.member_count == 3
    assert report.failed_teams == 0


def test_orphaned_folder_forces_has_any_data(source, audit_now):
    team = source.add_team(quiet_team("orphans"))
    team.root_items = team.root_items + [folder("ArchivedStuff", child_count=1, size=10)]
    source.activity = [ActivityRecord(team_id="orphans", last_activity_date=STALE)]
    report = run(source, audit_now)
    orphan_rows = [d for d in report.details if d.channel_name == "ArchivedStuff (Orphaned)"]
    assert len(orphan_rows) == 1
    assert orphan_rows[0].has_content == ContentState.NEEDS_MANUAL_REVIEW
    (summary,) = report.summaries
    assert summary.has_any_data
    assert not summary.safe_to_delete


def test_team_missing_from_activity_report_has_no_activity(source, audit_now):
    source.add_team(quiet_team("unreported"))
    report = run(source, audit_now)
    (summary,) = report.summaries
    assert summary.last_activity == "No Activity in Period"
    assert summary.safe_to_delete


def test_activity_report_failure_does_not_stop_the_run(audit_now):
    source = FakeTeamDirectorySource(teams=[quiet_team("a")], activity_error=ConnectionError("down"))
    report = run(source, audit_now)
    assert len(report.summaries) == 1
    assert report.summaries[0].last_activity == "No Activity in Period"


def test_directory_listing_failure_is_fatal(audit_now):
    source = FakeTeamDirectorySource(listing_error=ConnectionError("forbidden"))
    with pytest.raises(DirectoryListingError):
        run(source, audit_now)


def test_authentication_failure_on_activity_report_aborts_the_run(audit_now):
    team = quiet_team("active")
    source = FakeTeamDirectorySource(teams=[team], activity_error=GraphAuthenticationError("invalid_client"))
    with pytest.raises(GraphAuthenticationError):
        run(source, audit_now)


def test_authentication_failure_inside_a_team_aborts_the_run(source, audit_now):
    expired = source.add_team(quiet_team("expired"))
    expired.failures = {"get_owners": GraphAuthenticationError("token expired")}
    source.add_team(quiet_team("fine"))
    with pytest.raises(GraphAuthenticationError):
        run(source, audit_now, max_workers=2)


def test_authentication_failure_in_department_lookup_aborts_the_run(audit_now):
    source = FakeTeamDirectorySource(teams=[quiet_team("d")],
                                     department_error=GraphAuthenticationError("invalid_client"))
    with pytest.raises(GraphAuthenticationError):
        run(source, audit_now)


def test_failing_team_produces_error_rows_and_run_continues(source, audit_now):
    broken = source.add_team(quiet_team("broken", "Broken Team"))
    broken.failures = {"get_channels": RuntimeError("channel listing failed")}
    source.add_team(quiet_team("fine", "Fine Team"))
    report = run(source, audit_now)
    assert [s.team_name for s in report.summaries] == ["Broken Team", "Fine Team"]
    failed = report.summaries[0]
    assert not failed.safe_to_delete
    assert failed.reason.startswith("Error: ")
    error_rows = [d for d in report.details if d.team_id == "broken"]
    assert len(error_rows) == 1
    assert error_rows[0].has_content == ContentState.ERROR
    assert report.failed_teams == 1
    assert report.summaries[1].safe_to_delete


def test_department_failure_marks_error_but_audit_completes(audit_now):
    source = FakeTeamDirectorySource(teams=[quiet_team("d")], department_error=RuntimeError("throttled"))
    report = run(source, audit_now)
    assert report.summaries[0].departments == "Error retrieving"
    assert report.failed_teams == 0


def test_large_roster_departments_are_batched(source, audit_now):
    team = source.add_team(quiet_team("big"))
    team.members = [person(f"Member Number{i}", f"Dept{i % 4}") for i in range(40)]
    run(source, audit_now)
    assert [len(batch) for batch in source.lookup_batches] == [15, 15, 10]


def test_concurrent_run_preserves_listing_order(source, audit_now):
    for i in range(12):
        source.add_team(quiet_team(f"team{i:02d}", f"Team {i:02d}"))
    sequential = run(source, audit_now)
    concurrent = run(source, audit_now, max_workers=4)
    assert [s.team_id for s in concurrent.summaries] == [s.team_id for s in sequential.summaries]
    assert [d.team_id for d in concurrent.details] == [d.team_id for d in sequential.details]


def test_total_team_size_is_formatted(source, audit_now):
    team = source.add_team(quiet_team("sized"))
    team.drive = TeamDrive(size=734003200, web_url="https://contoso.sharepoint.com/sites/sized")
    report = run(source, audit_now)
    assert report.summaries[0].total_team_size == "700 MB"
    assert report.details[0].storage_url == "https://contoso.sharepoint.com/sites/sized"


def test_unprovisioned_private_channel_needs_review(source, audit_now):
    team = source.add_team(quiet_team("unprovisioned"))
    private = channel("Inner Circle", "private")
    team.channels = team.channels + [private]
    team.private_roots = {private.id: None}
    source.activity = [ActivityRecord(team_id="unprovisioned", last_activity_date=STALE)]
    report = run(source, audit_now)
    rows = {d.channel_name: d for d in report.details}
    assert rows["Inner Circle"].has_content == ContentState.NEEDS_MANUAL_REVIEW
    assert not report.summaries[0].safe_to_delete


def test_storage_item_from_drive_item():
    item = StorageItem.from_drive_item({"id": "x", "name": "General", "size": 12, "folder": {"childCount": 3}})
    assert item.is_folder and item.child_count == 3
    assert StorageItem.from_drive_item({"id": "y", "name": "a.txt", "file": {}}).is_file
