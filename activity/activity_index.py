"""
The activity index maps a team identifier to the last activity date reported
for it by the bulk usage report.  It is built once, before any team is
processed, and is read-only afterwards.

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
import logging
import os
import sys
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from data_models import ActivityRecord
from storage.collectors.base import FatalAuditError
from utils.data_validation import parse_iso_date
# pylint: enable=wrong-import-position


class ActivityIndex:
    """
    Team id -> last activity date string.

    A team that is absent from the report and a team whose date is blank are
    both "no recorded activity in the reporting window"; the distinction is
    kept (see has_record) but only a present, parseable date counts as
    activity.
    """

    logger = logging.getLogger("TeamAudit.ActivityIndex")

    def __init__(self, entries: Mapping[str, str] | None = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def build(cls, records: Iterable[ActivityRecord]) -> "ActivityIndex":
        """Build from report rows.  On duplicate team ids the last row wins."""
        entries: dict[str, str] = {}
        for record in records:
            entries[record.team_id] = record.last_activity_date or ""
        cls.logger.info("Activity index built with %d entries", len(entries))
        return cls(entries)

    @classmethod
    def from_source(cls, fetch: Callable[[], Iterable[ActivityRecord]]) -> "ActivityIndex":
        """
        Build from a report fetcher.  If the report cannot be obtained the
        index is empty and every team falls back to "no known activity"; the
        run continues.  A FatalAuditError (such as an authentication failure)
        is raised.
        """
        try:
            return cls.build(fetch())
        except FatalAuditError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            cls.logger.warning("Activity report unavailable, treating all teams as having no activity: %s", e)
            return cls()

    @property
    def entries(self) -> Mapping[str, str]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, team_id: object) -> bool:
        return team_id in self._entries

    def has_record(self, team_id: str) -> bool:
        return team_id in self._entries

    def get(self, team_id: str) -> str | None:
        """The raw date string, "" when blank, None when the team is not in the report."""
        return self._entries.get(team_id)

    def last_activity(self, team_id: str) -> datetime.date | None:
        return parse_iso_date(self._entries.get(team_id))

    def is_inactive(self, team_id: str, cutoff: datetime.date) -> bool:
        """Inactive when there is no usable date, or the date is before the cutoff."""
        last = self.last_activity(team_id)
        return last is None or last < cutoff


def inactivity_cutoff(inactivity_days: int, now: datetime.datetime | None = None) -> datetime.date:
    """The date before which a team's last activity counts as inactive."""
    if now is None:
        now = datetime.datetime.now(datetime.UTC)
    return (now - datetime.timedelta(days=inactivity_days)).date()
