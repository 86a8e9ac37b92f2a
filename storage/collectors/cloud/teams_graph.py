'''
Team directory source backed by Microsoft Graph.

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
import csv
import io
import logging
import os
import sys
from collections.abc import Iterator

if os.environ.get('TEAMAUDIT_ROOT') is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, 'TeamAudit.py')):
        current_path = os.path.dirname(current_path)
    os.environ['TEAMAUDIT_ROOT'] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from constants import TeamAuditConstants
from data_models import (
    ActivityRecord,
    Channel,
    ChannelMembershipType,
    RosterMember,
    StorageItem,
    TeamDirectoryEntry,
    TeamDrive,
)
from storage.collectors.base import TeamDirectorySource
from storage.collectors.cloud.graph_client import GraphClient, GraphRequestError
# pylint: enable=wrong-import-position


class GraphTeamDirectorySource(TeamDirectorySource):
    '''
    Reads teams, rosters, channels and document libraries from Microsoft
    Graph.  The application registration needs Reports.Read.All,
    Group.Read.All, Channel.ReadBasic.All, Files.Read.All and User.Read.All.
    '''

    activity_team_id_column = 'Team Id'
    activity_last_date_column = 'Last Activity Date'
    drive_item_fields = 'id,name,size,folder,file,webUrl'

    def __init__(self, client: GraphClient):
        self.client = client
        self.logger = logging.getLogger(f'TeamAudit.{self.__class__.__name__}')

    def get_activity_records(self) -> Iterator[ActivityRecord]:
        period = TeamAuditConstants.activity_report_period
        text = self.client.get_text(f"reports/getTeamsTeamActivityDetail(period='{period}')")
        reader = csv.DictReader(io.StringIO(text))
        for row in reader:
            team_id = (row.get(self.activity_team_id_column) or '').strip()
            if not team_id:
                continue
            yield ActivityRecord(
                team_id=team_id,
                last_activity_date=(row.get(self.activity_last_date_column) or '').strip(),
            )

    def list_teams(self) -> Iterator[TeamDirectoryEntry]:
        params = {
            '$filter': "resourceProvisioningOptions/Any(x:x eq 'Team')",
            '$select': 'id,displayName',
        }
        for group in self.client.get_paged('groups', params=params):
            yield TeamDirectoryEntry(id=group['id'], display_name=group.get('displayName') or '')

    def get_roster(self, team_id: str, relation: str) -> list[RosterMember]:
        params = {'$select': 'id,displayName'}
        return [
            RosterMember.from_directory_object(entry)
            for entry in self.client.get_paged(f'groups/{team_id}/{relation}', params=params)
        ]

    def get_owners(self, team_id: str) -> list[RosterMember]:
        return self.get_roster(team_id, 'owners')

    def get_members(self, team_id: str) -> list[RosterMember]:
        return self.get_roster(team_id, 'members')

    def get_channels(self, team_id: str) -> list[Channel]:
        params = {'$select': 'id,displayName,membershipType'}
        return [
            Channel(
                id=channel['id'],
                display_name=channel.get('displayName') or '',
                membership_type=ChannelMembershipType.from_graph(channel.get('membershipType')),
                team_id=team_id,
            )
            for channel in self.client.get_paged(f'teams/{team_id}/channels', params=params)
        ]

    def get_team_drive(self, team_id: str) -> TeamDrive:
        drive = self.client.get_json(f'groups/{team_id}/drive')
        quota = drive.get('quota') or {}
        return TeamDrive(size=quota.get('used') or 0, web_url=drive.get('webUrl') or '')

    def list_children(self, path: str) -> list[StorageItem]:
        params = {'$top': 999, '$select': self.drive_item_fields}
        return [StorageItem.from_drive_item(item) for item in self.client.get_paged(path, params=params)]

    def get_root_children(self, team_id: str) -> list[StorageItem]:
        return self.list_children(f'groups/{team_id}/drive/root/children')

    def get_folder_children(self, team_id: str, item_id: str) -> list[StorageItem]:
        return self.list_children(f'groups/{team_id}/drive/items/{item_id}/children')

    def get_private_channel_root(self, team_id: str, channel_id: str) -> StorageItem | None:
        try:
            folder = self.client.get_json(f'teams/{team_id}/channels/{channel_id}/filesFolder')
        except GraphRequestError as e:
            if e.status_code == 404:
                self.logger.info('No files folder provisioned for channel %s of team %s', channel_id, team_id)
                return None
            raise
        return StorageItem.from_drive_item(folder)

    def lookup_departments(self, identity_ids: list[str]) -> list[tuple[str, str | None]]:
        assert len(identity_ids) <= TeamAuditConstants.identity_lookup_batch_size, \
            f'At most {TeamAuditConstants.identity_lookup_batch_size} ids per lookup, got {len(identity_ids)}'
        if not identity_ids:
            return []
        id_list = ','.join(f"'{identity_id}'" for identity_id in identity_ids)
        params = {
            '$filter': f'id in ({id_list})',
            '$select': 'id,department',
        }
        return [(user['id'], user.get('department')) for user in self.client.get_paged('users', params=params)]
