"""
TeamAudit reviews the Microsoft Teams inventory of a tenant and recommends,
for every team and every channel in it, whether the content can be retired.

A team is a collaboration group: it has owners and members, a set of
declared channels, and a default document library that backs the channels
with folders.  The two views are maintained independently by the platform,
so the channel list and the folder tree routinely disagree (renamed
channels, folders left behind after a channel was deleted, private channels
with their own libraries.)  TeamAudit reconciles the two, classifies the
content state of each channel, and combines membership, activity recency
and content presence into a "safe to delete" recommendation.

TeamAudit never deletes anything.  The output is a pair of tables (one row
per channel, one row per team) intended for a human reviewer.

This file also marks the root of the project tree; modules locate the root
by searching upward for it.

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
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

__version__ = "0.1.0"
