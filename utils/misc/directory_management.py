"""
Default directory locations used by TeamAudit.

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

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from constants.values import TeamAuditConstants

# pylint: enable=wrong-import-position

teamaudit_default_data_dir = TeamAuditConstants.default_data_dir
teamaudit_default_config_dir = TeamAuditConstants.default_config_dir
teamaudit_default_log_dir = TeamAuditConstants.default_log_dir


def teamaudit_create_secure_directories(directories: list = None) -> None:
    """Create secure directories for TeamAudit.  Reports name people and
    departments, so the directories are private to the owner."""
    if directories is None:
        directories = [
            teamaudit_default_data_dir,
            teamaudit_default_config_dir,
            teamaudit_default_log_dir,
        ]
    for directory in directories:
        if not os.path.exists(directory):
            os.makedirs(directory)
        os.chmod(directory, 0o700)
