"""
Data models for the two report row shapes: one row per channel (detail) and
one row per team (summary).  The serialization aliases are the column
headings used by the report writers.

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
from enum import Enum

from pydantic import ConfigDict, Field, field_serializer

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from data_models.base import TeamAuditBaseModel
# pylint: enable=wrong-import-position


class ContentState(str, Enum):
    """Whether a channel's storage location holds meaningful content"""

    YES = "Yes"
    NO = "No"
    NEEDS_MANUAL_REVIEW = "Needs Manual Review"
    ERROR = "Error"


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


class ChannelAuditRow(TeamAuditBaseModel):
    """Detail row: one per declared channel, orphaned folder, or failed team"""

    team_name: str = Field(serialization_alias="Team Name")
    channel_name: str = Field(serialization_alias="Channel Name")
    member_count: int = Field(0, serialization_alias="Member Count")
    owner_count: int = Field(0, serialization_alias="Owner Count")
    last_activity: str = Field("", serialization_alias="Last Activity Date")
    total_team_size: str = Field("", serialization_alias="Total Team Size")
    channel_size: str = Field("", serialization_alias="Channel Size")
    storage_url: str = Field("", serialization_alias="Storage URL")
    item_count: str = Field("", serialization_alias="Item Count")
    has_content: ContentState = Field(ContentState.NO, serialization_alias="Has Content")
    status: str = Field("", serialization_alias="Status")
    team_id: str = Field("", serialization_alias="Team ID")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "team_name": "HR Taskforce",
                "channel_name": "General",
                "member_count": 14,
                "owner_count": 2,
                "last_activity": "2024-11-02",
                "total_team_size": "700 MB",
                "channel_size": "1 MB",
                "storage_url": "https://contoso.sharepoint.com/sites/HRTaskforce/Shared%20Documents",
                "item_count": "Enumerated 3 / Reported 3",
                "has_content": "Yes",
                "status": "Files found",
                "team_id": "02bd9fd6-8f93-4758-87c3-1fb73740a315",
            },
        },
    )


class TeamSummaryRow(TeamAuditBaseModel):
    """Summary row: one per team"""

    team_name: str = Field(serialization_alias="Team Name")
    member_count: int = Field(0, serialization_alias="Member Count")
    owner_count: int = Field(0, serialization_alias="Owner Count")
    safe_to_delete: bool = Field(False, serialization_alias="Safe To Delete")
    owner_names: str = Field("", serialization_alias="Owner Names")
    member_names: str = Field("", serialization_alias="Member Names")
    departments: str = Field("", serialization_alias="Departments")
    last_activity: str = Field("", serialization_alias="Last Activity Date")
    total_team_size: str = Field("", serialization_alias="Total Team Size")
    has_any_data: bool = Field(False, serialization_alias="Has Any Data")
    reason: str = Field("", serialization_alias="Reason")
    team_id: str = Field("", serialization_alias="Team ID")
    storage_url: str = Field("", serialization_alias="Storage URL")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "team_name": "HR Taskforce",
                "member_count": 14,
                "owner_count": 2,
                "safe_to_delete": False,
                "owner_names": "Adele Vance; Alex Wilber",
                "member_names": "AdelV; AlexW",
                "departments": "Retail; Marketing",
                "last_activity": "2024-11-02",
                "total_team_size": "700 MB",
                "has_any_data": True,
                "reason": "Team has recent activity.",
                "team_id": "02bd9fd6-8f93-4758-87c3-1fb73740a315",
                "storage_url": "https://contoso.sharepoint.com/sites/HRTaskforce/Shared%20Documents",
            },
        },
    )

    @field_serializer("safe_to_delete", "has_any_data")
    def serialize_flag(self, flag: bool) -> str:
        return yes_no(flag)


def main():
    """This allows testing the data models."""
    ChannelAuditRow.test_model_main()
    TeamSummaryRow.test_model_main()


if __name__ == "__main__":
    main()
