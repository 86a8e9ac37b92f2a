"""
Tests for the team-audit command line front end.

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
from unittest.mock import patch

current_path = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, current_path)
while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
    current_path = os.path.dirname(current_path)
sys.path.append(current_path)
os.environ["TEAMAUDIT_ROOT"] = current_path

# pylint: disable=wrong-import-position
from audit import audit_cli
from fake_directory import FakeTeam, FakeTeamDirectorySource, person
from storage.collectors.cloud import GraphAuthenticationError


def cli_args(tmp_path, *extra):
    config = tmp_path / "teamaudit-config.ini"
    config.write_text("[graph]\ntenant_id = t\nclient_id = c\nclient_secret = s\n", encoding="utf-8")
    return [
        "team-audit",
        "--config", str(config),
        "--output-dir", str(tmp_path / "reports"),
        "--log-dir", str(tmp_path / "logs"),
        *extra,
    ]


def test_successful_run_writes_reports(tmp_path, capsys):
    source = FakeTeamDirectorySource(teams=[
        FakeTeam(id="t1", display_name="Ghost Town"),
        FakeTeam(id="t2", display_name="Busy", members=[person("Adele Vance")]),
    ])
    with patch.object(sys, "argv", cli_args(tmp_path, "--format", "jsonl")), \
            patch.object(audit_cli, "MicrosoftGraphCredentials"), \
            patch.object(audit_cli, "GraphClient"), \
            patch.object(audit_cli, "GraphTeamDirectorySource", return_value=source):
        assert audit_cli.main() == 0
    out = capsys.readouterr().out
    assert "Audited 2 teams" in out
    written = os.listdir(tmp_path / "reports")
    assert len(written) == 2
    assert all(name.endswith(".jsonl") for name in written)


def test_fatal_listing_failure_exits_with_one(tmp_path, capsys):
    source = FakeTeamDirectorySource(listing_error=ConnectionError("forbidden"))
    with patch.object(sys, "argv", cli_args(tmp_path)), \
            patch.object(audit_cli, "MicrosoftGraphCredentials"), \
            patch.object(audit_cli, "GraphClient"), \
            patch.object(audit_cli, "GraphTeamDirectorySource", return_value=source):
        assert audit_cli.main() == 1
    assert "Audit failed" in capsys.readouterr().err


def test_authentication_failure_exits_with_one(tmp_path):
    source = FakeTeamDirectorySource(listing_error=GraphAuthenticationError("invalid_client"))
    with patch.object(sys, "argv", cli_args(tmp_path)), \
            patch.object(audit_cli, "MicrosoftGraphCredentials"), \
            patch.object(audit_cli, "GraphClient"), \
            patch.object(audit_cli, "GraphTeamDirectorySource", return_value=source):
        assert audit_cli.main() == 1


def test_authentication_failure_on_activity_report_exits_with_one(tmp_path, capsys):
    source = FakeTeamDirectorySource(
        teams=[FakeTeam(id="t1", display_name="Busy", members=[person("Adele Vance")])],
        activity_error=GraphAuthenticationError("invalid_client"),
    )
    with patch.object(sys, "argv", cli_args(tmp_path)), \
            patch.object(audit_cli, "MicrosoftGraphCredentials"), \
            patch.object(audit_cli, "GraphClient"), \
            patch.object(audit_cli, "GraphTeamDirectorySource", return_value=source):
        assert audit_cli.main() == 1
    assert "invalid_client" in capsys.readouterr().err
    assert not os.path.exists(tmp_path / "reports")
