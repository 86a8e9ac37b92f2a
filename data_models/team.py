"""
Data models for teams and their channels.

A team is a collaboration group with owners, members, a set of declared
channels and a default document library.  The directory listing only gives
us the identifier and display name (TeamDirectoryEntry); the auditor
enriches that into an immutable Team once the roster and drive have been
read.

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
from datetime import date
from enum import Enum

from pydantic import ConfigDict, Field

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from data_models.base import TeamAuditBaseModel
# pylint: enable=wrong-import-position


class ChannelMembershipType(str, Enum):
    """Enum representing the channel membership types reported by Teams"""

    STANDARD = "standard"
    SHARED = "shared"
    PRIVATE = "private"

    @classmethod
    def from_graph(cls, value: str | None) -> "ChannelMembershipType":
        """Graph reports unknownFutureValue for types it added later; treat
        anything unrecognized as a standard channel."""
        try:
            return cls(value)
        except ValueError:
            return cls.STANDARD


class TeamDirectoryEntry(TeamAuditBaseModel):
    """A team as returned by the directory listing"""

    id: str
    display_name: str

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "02bd9fd6-8f93-4758-87c3-1fb73740a315",
                "display_name": "HR Taskforce",
            },
        },
    )


class TeamDrive(TeamAuditBaseModel):
    """Summary of a team's default document library"""

    size: int = Field(0, ge=0)
    web_url: str = ""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "size": 734003200,
                "web_url": "https://contoso.sharepoint.com/sites/HRTaskforce/Shared%20Documents",
            },
        },
    )


class Team(TeamAuditBaseModel):
    """A team, enriched with roster counts, activity and storage totals"""

    id: str
    display_name: str
    owner_count: int = Field(0, ge=0)
    member_count: int = Field(0, ge=0)
    last_activity: date | None = None
    total_size: int = Field(0, ge=0)
    web_url: str = ""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "02bd9fd6-8f93-4758-87c3-1fb73740a315",
                "display_name": "HR Taskforce",
                "owner_count": 2,
                "member_count": 14,
                "last_activity": "2024-11-02",
                "total_size": 734003200,
                "web_url": "https://contoso.sharepoint.com/sites/HRTaskforce/Shared%20Documents",
            },
        },
    )


class Channel(TeamAuditBaseModel):
    """A channel declared by a team"""

    id: str
    display_name: str
    membership_type: ChannelMembershipType = ChannelMembershipType.STANDARD
    team_id: str | None = None

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "19:561fbdbbfca848a484f0a6f00ce9dbbd@thread.tacv2",
                "display_name": "General",
                "membership_type": "standard",
                "team_id": "02bd9fd6-8f93-4758-87c3-1fb73740a315",
            },
        },
    )

    @property
    def is_private(self) -> bool:
        return self.membership_type == ChannelMembershipType.PRIVATE


def main():
    """This allows testing the data models."""
    TeamDirectoryEntry.test_model_main()
    TeamDrive.test_model_main()
    Team.test_model_main()
    Channel.test_model_main()


if __name__ == "__main__":
    main()
