'''
This module defines the contract between the audit engine and the service
that supplies team, roster, channel and storage data.  The engine only ever
talks to a TeamDirectorySource; the Microsoft Graph implementation lives in
storage.collectors.cloud.teams_graph and tests supply an in-memory one.

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
'''
import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable

if os.environ.get('TEAMAUDIT_ROOT') is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, 'TeamAudit.py')):
        current_path = os.path.dirname(current_path)
    os.environ['TEAMAUDIT_ROOT'] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from data_models import (
    ActivityRecord,
    Channel,
    RosterMember,
    StorageItem,
    TeamDirectoryEntry,
    TeamDrive,
)
# pylint: enable=wrong-import-position


class TeamAuditError(Exception):
    '''Base class for errors raised by TeamAudit.'''


class FatalAuditError(TeamAuditError):
    '''An error after which no part of the run can be trusted; never degraded.'''


class DirectoryListingError(FatalAuditError):
    '''The team directory could not be listed; the run cannot proceed.'''


class TeamDirectorySource(ABC):
    '''
    Supplies the data an audit needs.  Implementations raise on transport
    failures; the expected "not there" answers are expressed as return
    values (an empty list, or None from get_private_channel_root.)
    '''

    @abstractmethod
    def get_activity_records(self) -> Iterable[ActivityRecord]:
        '''Rows of the bulk activity report (trailing 180 days).'''

    @abstractmethod
    def list_teams(self) -> Iterable[TeamDirectoryEntry]:
        '''Every team in the tenant.'''

    @abstractmethod
    def get_owners(self, team_id: str) -> list[RosterMember]:
        '''Owners of the team.'''

    @abstractmethod
    def get_members(self, team_id: str) -> list[RosterMember]:
        '''Members of the team.'''

    @abstractmethod
    def get_channels(self, team_id: str) -> list[Channel]:
        '''Channels declared by the team, including private and shared ones.'''

    @abstractmethod
    def get_team_drive(self, team_id: str) -> TeamDrive:
        '''Total size and location of the team's default document library.'''

    @abstractmethod
    def get_root_children(self, team_id: str) -> list[StorageItem]:
        '''Top level items of the team's default document library.'''

    @abstractmethod
    def get_folder_children(self, team_id: str, item_id: str) -> list[StorageItem]:
        '''Immediate children of a folder in the team's default library.'''

    @abstractmethod
    def get_private_channel_root(self, team_id: str, channel_id: str) -> StorageItem | None:
        '''
        Root folder of a private channel's own library, or None when the
        platform has not provisioned one.
        '''

    @abstractmethod
    def lookup_departments(self, identity_ids: list[str]) -> list[tuple[str, str | None]]:
        '''
        (identity id, department) for at most 15 identity ids per call.
        Ids the directory does not know are omitted from the answer.
        '''
