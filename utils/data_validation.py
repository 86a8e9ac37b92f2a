"""
This module contains validation helpers used by TeamAudit.

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
import uuid


def validate_uuid_string(uuid_string: str) -> bool:
    """
    Given a string, verify that it is a uuid in the canonical 8-4-4-4-12
    form.  Braced, urn:uuid: and undashed spellings are rejected.
    """
    if not isinstance(uuid_string, str):
        return False
    try:
        return str(uuid.UUID(uuid_string)) == uuid_string.lower()
    except ValueError:
        return False


def parse_iso_date(source: str | None) -> datetime.date | None:
    """
    Parse an ISO date or date-time string into a date.  Blank or malformed
    input yields None rather than an exception.
    """
    if not source or not isinstance(source, str) or not source.strip():
        return None
    source = source.strip()
    try:
        return datetime.date.fromisoformat(source)
    except ValueError:
        pass
    try:
        return datetime.datetime.fromisoformat(source.replace('Z', '+00:00')).date()
    except ValueError:
        return None
