"""
Command line front end: audit every team in the tenant and write the
channel detail and team summary reports.

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

import argparse
import logging
import os
import platform
import sys

from icecream import ic

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from audit.team_auditor import TeamAuditor
from storage.collectors.base import TeamAuditError
from storage.collectors.cloud import (
    GraphClient,
    GraphTeamDirectorySource,
    MicrosoftGraphCredentials,
)
from storage.recorders import AuditReportWriter
from utils.audit_config import TeamAuditConfig
from utils.i_logging import TeamAuditLogging
from utils.misc.directory_management import teamaudit_default_log_dir
# pylint: enable=wrong-import-position


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Audit Microsoft Teams workspaces and recommend which are safe to delete.",
    )
    parser.add_argument("--config", default=TeamAuditConfig.default_config_file, type=str,
                        help="INI configuration file (default: %(default)s)")
    parser.add_argument("--tenant-id", default=None, type=str, help="Directory (tenant) id")
    parser.add_argument("--client-id", default=None, type=str, help="Application (client) id")
    parser.add_argument("--inactivity-days", default=None, type=int,
                        help="Days without activity before a team counts as inactive")
    parser.add_argument("--max-workers", default=None, type=int,
                        help="Number of teams audited concurrently")
    parser.add_argument("--output-dir", default=None, type=str, help="Directory for the reports")
    parser.add_argument("--format", default=None, choices=["jsonl", "csv", "both"],
                        dest="output_format", help="Report file format")
    parser.add_argument("--log-dir", default=teamaudit_default_log_dir, type=str,
                        help="Directory for log files (default: %(default)s)")
    parser.add_argument("--logging-level", default="INFO",
                        choices=TeamAuditLogging.get_logging_levels(),
                        help="Logging level (default: %(default)s)")
    parser.add_argument("--debug", default=False, action="store_true", help="Print debug tracing")
    return parser


def main() -> int:
    """Run an audit; returns the process exit status."""
    args = build_parser().parse_args()
    if not args.debug:
        ic.disable()
    audit_logging = TeamAuditLogging(
        service_name="teamaudit",
        platform=platform.system(),
        log_dir=args.log_dir,
        log_level=TeamAuditLogging.map_logging_type_to_level(args.logging_level),
    )
    logger = logging.getLogger("TeamAudit.cli")
    ic(args, audit_logging.get_log_file_name())
    try:
        config = TeamAuditConfig(args.config)
        graph_settings = config.get_graph_settings(tenant_id=args.tenant_id, client_id=args.client_id)
        settings = config.get_audit_settings(
            inactivity_days=args.inactivity_days,
            max_workers=args.max_workers,
            output_dir=args.output_dir,
            output_format=args.output_format,
        )
        ic(settings)
        credentials = MicrosoftGraphCredentials(graph_settings)
        source = GraphTeamDirectorySource(GraphClient(credentials))
        report = TeamAuditor(source, settings).run()
        files = AuditReportWriter(settings.output_dir, settings.output_format).write(
            report.details, report.summaries,
        )
    except (TeamAuditError, OSError) as e:
        logger.error("Audit failed: %s", e)
        print(f"Audit failed: {e}", file=sys.stderr)
        return 1
    print(f"Audited {len(report.summaries)} teams: {report.safe_to_delete_count} safe to delete, "
          f"{report.failed_teams} could not be audited.")
    for file_name in files:
        print(f"  {file_name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
