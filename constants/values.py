"""
This package defines constants used in TeamAudit.  It cannot
depend on anything else (it exists to break circular dependencies that seem
to arise in the code base.)

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

if os.environ.get('TEAMAUDIT_ROOT') is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, 'TeamAudit.py')):
        current_path = os.path.dirname(current_path)
    os.environ['TEAMAUDIT_ROOT'] = current_path
    sys.path.append(current_path)


class TeamAuditConstants:

    default_prefix = 'teamaudit'
    default_config_file_name = f'{default_prefix}-config.ini'
    default_data_dir = os.path.join(os.environ.get('TEAMAUDIT_ROOT', '.'), 'data')
    default_config_dir = os.path.join(os.environ.get('TEAMAUDIT_ROOT', '.'), 'config')
    default_log_dir = os.path.join(os.environ.get('TEAMAUDIT_ROOT', '.'), 'logs')

    # Platform imposed: Graph rejects "id in (...)" filters with more than 15 values.
    identity_lookup_batch_size = 15
    activity_report_period = 'D180'
    default_inactivity_days = 90
    default_max_workers = 1

    # (connect, read) timeout applied to every Graph call
    graph_request_timeout = (10, 30)
    graph_max_retries = 5
    graph_api_endpoint = 'https://graph.microsoft.com/v1.0'
    graph_default_scope = ['https://graph.microsoft.com/.default']

    large_roster_threshold = 5
    name_separator = '; '
    general_channel_name = 'General'
    no_activity_text = 'No Activity in Period'
    department_error_text = 'Error retrieving'
    orphan_suffix = ' (Orphaned)'
    orphan_status = 'Orphaned Folder'
    error_text = 'Error'
    not_applicable_text = 'N/A'

    client_secret_environment_variable = 'TEAMAUDIT_CLIENT_SECRET'
