"""
Data model for an item (file or folder) in a team's document library.

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


class StorageItem(TeamAuditBaseModel):
    """
    A drive item.  child_count is the count the platform reports for a
    folder; it is not guaranteed to agree with what enumerating the folder
    actually returns.
    """

    id: str
    name: str
    size: int = Field(0, ge=0)
    is_folder: bool = False
    child_count: int = Field(0, ge=0)
    web_url: str | None = None

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "01BYE5RZ6QN3ZWBTUFOFD3GSPGOHDJD36K",
                "name": "General",
                "size": 1048576,
                "is_folder": True,
                "child_count": 3,
                "web_url": "https://contoso.sharepoint.com/sites/HRTaskforce/Shared%20Documents/General",
            },
        },
    )

    @property
    def is_file(self) -> bool:
        return not self.is_folder

    @classmethod
    def from_drive_item(cls, item: dict[str, Any]) -> "StorageItem":
        """Build from a Graph driveItem resource."""
        folder = item.get("folder")
        return cls(
            id=item["id"],
            name=item.get("name", ""),
            size=item.get("size") or 0,
            is_folder=folder is not None,
            child_count=(folder or {}).get("childCount") or 0,
            web_url=item.get("webUrl"),
        )


def main():
    """This allows testing the data model."""
    StorageItem.test_model_main()


if __name__ == "__main__":
    main()
