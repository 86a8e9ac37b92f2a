"""
Data model for the settings that drive an audit run.

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

from pydantic import ConfigDict, Field

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from constants import TeamAuditConstants
from data_models.base import TeamAuditBaseModel
# pylint: enable=wrong-import-position


class GraphSettings(TeamAuditBaseModel):
    """Application registration used to reach Microsoft Graph"""

    tenant_id: str
    client_id: str
    client_secret: str = Field(repr=False)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "tenant_id": "72f988bf-86f1-41af-91ab-2d7cd011db47",
                "client_id": "6731de76-14a6-49ae-97bc-6eba6914391e",
                "client_secret": "not-a-real-secret",
            },
        },
    )


class AuditSettings(TeamAuditBaseModel):
    """Tunables for a single audit run"""

    inactivity_days: int = Field(TeamAuditConstants.default_inactivity_days, ge=0)
    batch_size: int = Field(
        TeamAuditConstants.identity_lookup_batch_size,
        ge=1,
        le=TeamAuditConstants.identity_lookup_batch_size,
    )
    max_workers: int = Field(TeamAuditConstants.default_max_workers, ge=1)
    output_dir: str = TeamAuditConstants.default_data_dir
    output_format: str = Field("both", pattern="^(jsonl|csv|both)$")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "inactivity_days": 90,
                "batch_size": 15,
                "max_workers": 1,
                "output_dir": "data",
                "output_format": "both",
            },
        },
    )


def main():
    """This allows testing the data models."""
    GraphSettings.test_model_main()
    AuditSettings.test_model_main()


if __name__ == "__main__":
    main()
