"""
The deletion decision: combine emptiness, inactivity and content presence
into a recommendation and a human readable reason.

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

from dataclasses import dataclass

REASON_NO_PEOPLE = "Team has no members or owners."
REASON_INACTIVE_AND_EMPTY = "Team is inactive and contains no files."
REASON_RECENT_ACTIVITY = "Team has recent activity."
REASON_HAS_DATA = "Team contains files or needs review."
REASON_RESIDUAL = "Team has members but is inactive and empty."


@dataclass(frozen=True)
class DeletionDecision:
    safe_to_delete: bool
    reason: str


def decide(is_empty_of_people: bool, is_inactive: bool, has_any_data: bool) -> DeletionDecision:
    """
    First matching rule wins:

    1. no owners and no members -> safe to delete
    2. inactive and no data     -> safe to delete
    3. otherwise                -> keep, with the reason that applies
    """
    if is_empty_of_people:
        return DeletionDecision(True, REASON_NO_PEOPLE)
    if is_inactive and not has_any_data:
        return DeletionDecision(True, REASON_INACTIVE_AND_EMPTY)
    if not is_inactive:
        return DeletionDecision(False, REASON_RECENT_ACTIVITY)
    if has_any_data:
        return DeletionDecision(False, REASON_HAS_DATA)
    # Rules 2 and 3 cover every remaining combination; this is not reachable.
    return DeletionDecision(False, REASON_RESIDUAL)
