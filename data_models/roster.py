"""
Data model for owner and member entries of a team roster.

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
from typing import Any

from pydantic import ConfigDict

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from data_models.base import TeamAuditBaseModel
# pylint: enable=wrong-import-position


class RosterMember(TeamAuditBaseModel):
    """
    An owner or member of a team.  Rosters can contain service principals,
    devices and guests, so every field is optional.
    """

    display_name: str | None = None
    identity_id: str | None = None
    department: str | None = None

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "display_name": "Adele Vance",
                "identity_id": "87d349ed-44d7-43e1-9a83-5f2406dee5bd",
                "department": "Retail",
            },
        },
    )

    @classmethod
    def from_directory_object(cls, entry: dict[str, Any]) -> "RosterMember":
        """Build from a Graph directoryObject (user, group, device...)."""
        return cls(
            display_name=entry.get("displayName"),
            identity_id=entry.get("id"),
            department=entry.get("department"),
        )


def main():
    """This allows testing the data model."""
    RosterMember.test_model_main()


if __name__ == "__main__":
    main()
