"""
Generic log management for TeamAudit

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
import logging
import os
import sys

if os.environ.get('TEAMAUDIT_ROOT') is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, 'TeamAudit.py')):
        current_path = os.path.dirname(current_path)
    os.environ['TEAMAUDIT_ROOT'] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from utils.singleton import TeamAuditSingleton
from utils.misc.directory_management import teamaudit_default_log_dir
import utils.misc.file_name_management
# pylint: enable=wrong-import-position


class TeamAuditLogging(TeamAuditSingleton):
    """Class for managing TeamAudit logging."""

    def __init__(self, **kwargs):
        """Initialize a new instance of the TeamAuditLogging class object."""
        if self._initialized:
            return
        self.log_level = kwargs.get('log_level', logging.INFO)
        self.log_dir = kwargs.get('log_dir', teamaudit_default_log_dir)
        self.log_file = kwargs.get('log_file', TeamAuditLogging.generate_log_file_name(**kwargs))
        os.makedirs(self.log_dir, exist_ok=True)
        log_name = os.path.join(self.log_dir, self.log_file)
        logging.basicConfig(filename=log_name,
                            level=self.log_level,
                            format='%(asctime)s %(name)s %(levelname)s %(message)s')
        if kwargs.get('console', True):
            # warnings and above also go to the console so partial runs are visible
            console = logging.StreamHandler()
            console.setLevel(logging.WARNING)
            console.setFormatter(logging.Formatter('%(levelname)s %(message)s'))
            logging.getLogger().addHandler(console)
        for noisy in ('msal', 'urllib3'):
            logging.getLogger(noisy).setLevel(logging.WARNING)
        logging.info('TeamAuditLogging initialized, logging level set to %s', self.log_level)
        self._initialized = True

    def get_log_file_name(self) -> str:
        """Return the log file name."""
        return self.log_file

    @staticmethod
    def get_logging_levels() -> list:
        """Return a list of valid logging levels."""
        return sorted(set(logging.getLevelNamesMapping()))

    @staticmethod
    def map_logging_type_to_level(logging_type : str) -> int:
        """Map a logging type to a logging level."""
        return logging.getLevelNamesMapping()[logging_type]

    @staticmethod
    def generate_log_file_name(**kwargs) -> str:
        now = datetime.datetime.now(datetime.timezone.utc)
        timestamp=now.isoformat()
        service_name = kwargs.get('service_name', 'unknown_service')
        fnargs = {
            'service': service_name,
            'timestamp': timestamp,
            'suffix': 'log'
        }
        if 'platform' in kwargs:
            fnargs['platform'] = kwargs['platform']
        return utils.misc.file_name_management.generate_file_name(**fnargs)
