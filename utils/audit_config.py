"""
Configuration for an audit run: the INI file in the config directory, the
client secret environment variable and command line overrides, in that
order of increasing precedence.

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

import configparser
import logging
import os
import sys
from typing import Any

from pydantic import ValidationError

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from constants import TeamAuditConstants
from data_models import AuditSettings, GraphSettings
from storage.collectors.base import TeamAuditError
from utils.misc.directory_management import teamaudit_default_config_dir
# pylint: enable=wrong-import-position


class ConfigurationError(TeamAuditError):
    """The configuration is incomplete or invalid."""


class TeamAuditConfig:
    """Read the config file and build the settings for a run."""

    default_config_file = os.path.join(
        teamaudit_default_config_dir,
        TeamAuditConstants.default_config_file_name,
    )
    graph_section = "graph"
    audit_section = "audit"
    audit_keys = ("inactivity_days", "max_workers", "output_dir", "output_format")

    def __init__(self, config_file: str | None = None, environ: dict | None = None):
        self.config_file = config_file if config_file is not None else self.default_config_file
        self.environ = environ if environ is not None else os.environ
        self.config = configparser.ConfigParser()
        self.logger = logging.getLogger(f"TeamAudit.{self.__class__.__name__}")
        self.__load_config__()

    def __load_config__(self) -> None:
        if not os.path.exists(self.config_file):
            self.logger.info("No config file at %s, using defaults", self.config_file)
            return
        try:
            self.config.read(self.config_file, encoding="utf-8-sig")
        except configparser.Error as e:
            raise ConfigurationError(f"Could not read config file {self.config_file}: {e}") from e
        self.logger.debug("Loaded config from %s", self.config_file)

    def get_value(self, section: str, key: str) -> str | None:
        if not self.config.has_section(section):
            return None
        value = self.config[section].get(key)
        if value is None or not value.strip():
            return None
        return value.strip()

    def get_graph_settings(self,
                           tenant_id: str | None = None,
                           client_id: str | None = None,
                           client_secret: str | None = None) -> GraphSettings:
        """Arguments that are not None override the file and environment."""
        values = {
            "tenant_id": tenant_id or self.get_value(self.graph_section, "tenant_id"),
            "client_id": client_id or self.get_value(self.graph_section, "client_id"),
            "client_secret": (client_secret
                              or self.environ.get(TeamAuditConstants.client_secret_environment_variable)
                              or self.get_value(self.graph_section, "client_secret")),
        }
        missing = [key for key, value in values.items() if not value]
        if missing:
            raise ConfigurationError(
                f"Missing Graph settings: {', '.join(missing)} "
                f"(set them in {self.config_file}"
                f" or {TeamAuditConstants.client_secret_environment_variable} for the secret)",
            )
        return GraphSettings(**values)

    def get_audit_settings(self, **overrides: Any) -> AuditSettings:
        """Overrides whose value is None are ignored."""
        values: dict[str, Any] = {}
        for key in self.audit_keys:
            value = self.get_value(self.audit_section, key)
            if value is not None:
                values[key] = value
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return AuditSettings(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid audit settings: {e}") from e
