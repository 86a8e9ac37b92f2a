"""
Timestamp helpers used when building TeamAudit file names.

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


def extract_iso_timestamp_from_file_timestamp(file_timestamp: str) -> str:
    """Given a file timestamp, convert it to an ISO timestamp."""
    ts = file_timestamp.replace("_", "-").replace("#", ":")
    datetime.datetime.fromisoformat(ts)  # raises ValueError when not valid
    return ts


def generate_iso_timestamp_for_file(ts: str = None) -> str:
    """Create a file name safe timestamp label (':' and '-' are reserved)."""
    if ts is None:
        ts = datetime.datetime.now(datetime.UTC).isoformat()
    ts_check = extract_iso_timestamp_from_file_timestamp(ts.replace(":", "#").replace("-", "_"))
    if ts_check != ts:  # validate that the timestamp is reversible
        raise ValueError(f"timestamp mismatch {ts} != {ts_check}")
    return f"-ts={ts.replace(':', '#').replace('-', '_')}"
