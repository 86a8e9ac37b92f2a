"""
Drives an audit run: builds the activity index, walks the team directory,
and for each team resolves membership, reconciles storage and decides
whether the team is safe to delete.

Each team is processed inside its own error boundary: a failure produces
error rows for that team and the run moves on.  Teams are independent of
one another (the activity index is the only shared state and it is frozen
before the first team starts), so they may be spread over a bounded pool
of worker threads.

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

import concurrent.futures
import datetime
import logging
import os
import sys
from dataclasses import dataclass, field

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from activity import ActivityIndex, inactivity_cutoff
from audit.decision import decide
from audit.membership import MembershipResolver
from audit.storage_reconciler import StorageReconciler
from constants import TeamAuditConstants
from data_models import (
    AuditSettings,
    ChannelAuditRow,
    ContentState,
    Team,
    TeamDirectoryEntry,
    TeamSummaryRow,
)
from storage.collectors.base import DirectoryListingError, FatalAuditError, TeamDirectorySource
from utils.misc.size_format import format_size
# pylint: enable=wrong-import-position


@dataclass
class TeamAuditResult:
    """The rows produced for one team."""

    summary: TeamSummaryRow
    details: list[ChannelAuditRow]
    failed: bool = False


@dataclass
class AuditReport:
    """The rows produced by a run, in directory listing order."""

    summaries: list[TeamSummaryRow] = field(default_factory=list)
    details: list[ChannelAuditRow] = field(default_factory=list)
    failed_teams: int = 0

    def add(self, result: TeamAuditResult) -> None:
        self.summaries.append(result.summary)
        self.details.extend(result.details)
        if result.failed:
            self.failed_teams += 1

    @property
    def safe_to_delete_count(self) -> int:
        return sum(1 for s in self.summaries if s.safe_to_delete)


def format_last_activity(last_activity: datetime.date | None) -> str:
    if last_activity is None:
        return TeamAuditConstants.no_activity_text
    return last_activity.isoformat()


class TeamAuditor:
    """Runs the audit against a TeamDirectorySource."""

    def __init__(self,
                 source: TeamDirectorySource,
                 settings: AuditSettings | None = None,
                 now: datetime.datetime | None = None):
        self.source = source
        self.settings = settings if settings is not None else AuditSettings()
        self.now = now if now is not None else datetime.datetime.now(datetime.UTC)
        self.cutoff = inactivity_cutoff(self.settings.inactivity_days, self.now)
        self.membership_resolver = MembershipResolver(source.lookup_departments, self.settings.batch_size)
        self.storage_reconciler = StorageReconciler(source)
        self.logger = logging.getLogger(f"TeamAudit.{self.__class__.__name__}")

    def build_activity_index(self) -> ActivityIndex:
        return ActivityIndex.from_source(self.source.get_activity_records)

    def list_teams(self) -> list[TeamDirectoryEntry]:
        """The team directory; failing to list it ends the run."""
        try:
            return list(self.source.list_teams())
        except Exception as e:
            self.logger.error("Unable to list teams: %s", e)
            raise DirectoryListingError(f"Unable to list teams: {e}") from e

    def run(self) -> AuditReport:
        activity_index = self.build_activity_index()
        teams = self.list_teams()
        self.logger.info("Auditing %d teams (inactivity cutoff %s, %d worker(s))",
                         len(teams), self.cutoff.isoformat(), self.settings.max_workers)
        report = AuditReport()
        if self.settings.max_workers <= 1:
            for index, entry in enumerate(teams, start=1):
                self.logger.info("Team %d/%d: %s", index, len(teams), entry.display_name)
                report.add(self.audit_team(entry, activity_index))
        else:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
                # map yields in submission order, so the report keeps listing order
                for result in executor.map(lambda entry: self.audit_team(entry, activity_index), teams):
                    report.add(result)
        self.logger.info("Audit complete: %d teams, %d safe to delete, %d failed",
                         len(report.summaries), report.safe_to_delete_count, report.failed_teams)
        return report

    def audit_team(self, entry: TeamDirectoryEntry, activity_index: ActivityIndex) -> TeamAuditResult:
        """Audit one team; any failure other than a FatalAuditError becomes error rows for this team only."""
        try:
            return self._audit_team(entry, activity_index)
        except FatalAuditError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            self.logger.error("Failed to audit team %s (%s): %s", entry.display_name, entry.id, e)
            return self.error_result(entry, activity_index, e)

    def _audit_team(self, entry: TeamDirectoryEntry, activity_index: ActivityIndex) -> TeamAuditResult:
        owners = self.source.get_owners(entry.id)
        members = self.source.get_members(entry.id)
        membership = self.membership_resolver.resolve(owners, members)
        drive = self.source.get_team_drive(entry.id)
        channels = self.source.get_channels(entry.id)
        root_items = self.source.get_root_children(entry.id)
        reconciliation = self.storage_reconciler.reconcile(entry.id, channels, root_items)

        team = Team(
            id=entry.id,
            display_name=entry.display_name,
            owner_count=membership.owner_count,
            member_count=membership.member_count,
            last_activity=activity_index.last_activity(entry.id),
            total_size=drive.size,
            web_url=drive.web_url,
        )
        decision = decide(
            is_empty_of_people=membership.is_empty_of_people,
            is_inactive=activity_index.is_inactive(entry.id, self.cutoff),
            has_any_data=reconciliation.has_any_data,
        )
        last_activity = format_last_activity(team.last_activity)
        total_size = format_size(team.total_size)

        details = [
            ChannelAuditRow(
                team_name=team.display_name,
                channel_name=probe.channel_name,
                member_count=team.member_count,
                owner_count=team.owner_count,
                last_activity=last_activity,
                total_team_size=total_size,
                channel_size=probe.size,
                storage_url=team.web_url,
                item_count=probe.item_count,
                has_content=probe.state,
                status=probe.status,
                team_id=team.id,
            )
            for probe in reconciliation.probes
        ]
        summary = TeamSummaryRow(
            team_name=team.display_name,
            member_count=team.member_count,
            owner_count=team.owner_count,
            safe_to_delete=decision.safe_to_delete,
            owner_names=membership.owner_names,
            member_names=membership.member_names,
            departments=membership.departments,
            last_activity=last_activity,
            total_team_size=total_size,
            has_any_data=reconciliation.has_any_data,
            reason=decision.reason,
            team_id=team.id,
            storage_url=team.web_url,
        )
        return TeamAuditResult(summary=summary, details=details)

    @staticmethod
    def error_result(entry: TeamDirectoryEntry,
                     activity_index: ActivityIndex,
                     error: Exception) -> TeamAuditResult:
        """A failed team is never recommended for deletion."""
        message = f"{TeamAuditConstants.error_text}: {error}"
        last_activity = format_last_activity(activity_index.last_activity(entry.id))
        summary = TeamSummaryRow(
            team_name=entry.display_name,
            safe_to_delete=False,
            last_activity=last_activity,
            total_team_size=TeamAuditConstants.error_text,
            reason=message,
            team_id=entry.id,
        )
        detail = ChannelAuditRow(
            team_name=entry.display_name,
            channel_name=TeamAuditConstants.error_text,
            last_activity=last_activity,
            total_team_size=TeamAuditConstants.error_text,
            channel_size=TeamAuditConstants.error_text,
            item_count=TeamAuditConstants.error_text,
            has_content=ContentState.ERROR,
            status=message,
            team_id=entry.id,
        )
        return TeamAuditResult(summary=summary, details=[detail], failed=True)
