"""
Membership resolution for a single team: owner and member display strings,
and the departments of the members, looked up in batches.

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

import logging
import os
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from constants import TeamAuditConstants
from data_models import RosterMember
from storage.collectors.base import FatalAuditError
from utils.data_validation import validate_uuid_string
from utils.misc.chunking import chunked
# pylint: enable=wrong-import-position

DepartmentLookup = Callable[[list[str]], Sequence[tuple[str, str | None]]]


@dataclass(frozen=True)
class MembershipSummary:
    """Display strings and counts for one team's roster."""

    owner_names: str
    member_names: str
    departments: str
    owner_count: int
    member_count: int

    @property
    def is_empty_of_people(self) -> bool:
        return self.owner_count == 0 and self.member_count == 0


def abbreviate_name(name: str) -> str:
    """
    First four characters of the first token plus the first character of
    the last token: "Adele Vance" -> "AdelV".  A single token name keeps
    only its first four characters.
    """
    tokens = name.split()
    if not tokens:
        return ""
    short = tokens[0][:4]
    if len(tokens) > 1:
        short += tokens[-1][0]
    return short


def _display_names(people: Sequence[RosterMember]) -> list[str]:
    return [p.display_name.strip() for p in people if p.display_name and p.display_name.strip()]


class MembershipResolver:
    """Resolves a team roster into the strings the report carries."""

    def __init__(self,
                 department_lookup: DepartmentLookup,
                 batch_size: int = TeamAuditConstants.identity_lookup_batch_size):
        if not 1 <= batch_size <= TeamAuditConstants.identity_lookup_batch_size:
            raise ValueError(
                f"batch_size must be between 1 and {TeamAuditConstants.identity_lookup_batch_size}, not {batch_size}"
            )
        self.department_lookup = department_lookup
        self.batch_size = batch_size
        self.logger = logging.getLogger(f"TeamAudit.{self.__class__.__name__}")

    @staticmethod
    def format_owner_names(owners: Sequence[RosterMember]) -> str:
        return TeamAuditConstants.name_separator.join(_display_names(owners))

    @staticmethod
    def format_member_names(members: Sequence[RosterMember]) -> str:
        names = _display_names(members)
        if len(members) > TeamAuditConstants.large_roster_threshold:
            names = [abbreviate_name(name) for name in names]
        return TeamAuditConstants.name_separator.join(names)

    def resolve_departments(self, members: Sequence[RosterMember]) -> str:
        """
        Departments of the members whose identity id is GUID shaped, in the
        order first seen.  A failed batch turns the whole field into the
        error marker.
        """
        identity_ids = [m.identity_id for m in members if validate_uuid_string(m.identity_id)]
        departments: list[str] = []
        for batch in chunked(identity_ids, self.batch_size):
            try:
                answers = self.department_lookup(batch)
            except FatalAuditError:
                raise
            except Exception as e:  # pylint: disable=broad-exception-caught
                self.logger.warning("Department lookup failed for a batch of %d ids: %s", len(batch), e)
                return TeamAuditConstants.department_error_text
            for _, department in answers:
                if department and department.strip() and department.strip() not in departments:
                    departments.append(department.strip())
        return TeamAuditConstants.name_separator.join(departments)

    def resolve(self, owners: Sequence[RosterMember], members: Sequence[RosterMember]) -> MembershipSummary:
        return MembershipSummary(
            owner_names=self.format_owner_names(owners),
            member_names=self.format_member_names(members),
            departments=self.resolve_departments(members),
            owner_count=len(owners),
            member_count=len(members),
        )
