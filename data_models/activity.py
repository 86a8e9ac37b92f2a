"""
Data model for one row of the bulk team activity report.

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


class ActivityRecord(TeamAuditBaseModel):
    """Last activity date for a team; blank when nothing was recorded in the period"""

    team_id: str
    last_activity_date: str = ""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "team_id": "02bd9fd6-8f93-4758-87c3-1fb73740a315",
                "last_activity_date": "2024-11-02",
            },
        },
    )


def main():
    """This allows testing the data model."""
    ActivityRecord.test_model_main()


if __name__ == "__main__":
    main()
