"""initializtion logic for the TeamAudit data models."""

import os
import sys

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from data_models.activity import ActivityRecord  # noqa: E402
from data_models.base import TeamAuditBaseModel  # noqa: E402
from data_models.report_rows import (  # noqa: E402
    ChannelAuditRow,
    ContentState,
    TeamSummaryRow,
)
from data_models.roster import RosterMember  # noqa: E402
from data_models.settings import AuditSettings, GraphSettings  # noqa: E402
from data_models.storage_item import StorageItem  # noqa: E402
from data_models.team import (  # noqa: E402
    Channel,
    ChannelMembershipType,
    Team,
    TeamDirectoryEntry,
    TeamDrive,
)
# pylint: enable=wrong-import-position

__version__ = "0.1.0"

__all__ = [
    "ActivityRecord",
    "AuditSettings",
    "Channel",
    "ChannelAuditRow",
    "ChannelMembershipType",
    "ContentState",
    "GraphSettings",
    "RosterMember",
    "StorageItem",
    "Team",
    "TeamAuditBaseModel",
    "TeamDirectoryEntry",
    "TeamDrive",
    "TeamSummaryRow",
]
