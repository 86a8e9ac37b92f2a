"""
Shared fixtures for the TeamAudit tests.

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

import datetime
import os
import sys

import pytest

current_path = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, current_path)
while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
    current_path = os.path.dirname(current_path)
sys.path.append(current_path)
os.environ["TEAMAUDIT_ROOT"] = current_path

# pylint: disable=wrong-import-position
from fake_directory import FakeTeamDirectorySource
# pylint: enable=wrong-import-position

AUDIT_NOW = datetime.datetime(2025, 3, 1, 12, 0, tzinfo=datetime.UTC)


@pytest.fixture
def audit_now() -> datetime.datetime:
    """A fixed clock; with 90 inactivity days the cutoff is 2024-12-01."""
    return AUDIT_NOW


@pytest.fixture
def source() -> FakeTeamDirectorySource:
    return FakeTeamDirectorySource()
