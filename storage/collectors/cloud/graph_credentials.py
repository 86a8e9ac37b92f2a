'''
Credential management for the Microsoft Graph API.  TeamAudit runs
unattended against a whole tenant, so it authenticates as an application
(client credentials) rather than as a signed in user.

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
import logging
import os
import sys

import msal
import requests

if os.environ.get('TEAMAUDIT_ROOT') is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, 'TeamAudit.py')):
        current_path = os.path.dirname(current_path)
    os.environ['TEAMAUDIT_ROOT'] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from constants import TeamAuditConstants
from data_models import GraphSettings
from storage.collectors.base import FatalAuditError
# pylint: enable=wrong-import-position


class GraphAuthenticationError(FatalAuditError):
    '''No access token could be obtained; the run cannot proceed.'''


class MicrosoftGraphCredentials:
    '''This encapsulates the credential management for the Microsoft Graph API.'''

    def __init__(self, settings: GraphSettings, cache_file: str | None = None):
        self.settings = settings
        self.cache_file = cache_file
        self.scopes = TeamAuditConstants.graph_default_scope
        self.token = None
        self.logger = logging.getLogger(f'TeamAudit.{self.__class__.__name__}')
        self.__load_cache__()
        try:
            self.app = msal.ConfidentialClientApplication(
                client_id=settings.client_id,
                client_credential=settings.client_secret,
                authority=f'https://login.microsoftonline.com/{settings.tenant_id}',
                token_cache=self.cache,
            )
        except (ValueError, requests.exceptions.RequestException) as e:
            # msal resolves the authority eagerly; an unknown tenant fails here
            self.logger.error('Unable to reach authority for tenant %s: %s', settings.tenant_id, e)
            raise GraphAuthenticationError(f'Unable to reach authority for tenant {settings.tenant_id}: {e}') from e

    def __load_cache__(self):
        self.cache = msal.SerializableTokenCache()
        if self.cache_file and os.path.exists(self.cache_file):
            self.logger.info('Cache file exists, deserializing')
            with open(self.cache_file, 'rt', encoding='utf-8') as cache:
                self.cache.deserialize(cache.read())

    def __save_cache__(self):
        if self.cache_file and self.cache.has_state_changed:
            with open(self.cache_file, 'wt', encoding='utf-8') as cache:
                cache.write(self.cache.serialize())

    def __get_token__(self) -> str:
        if self.token is not None:
            return self.token
        # msal answers from its cache when it holds an unexpired token
        result = self.app.acquire_token_for_client(scopes=self.scopes)
        if not result or 'access_token' not in result:
            error = (result or {}).get('error', 'unknown error')
            error_desc = (result or {}).get('error_description', 'No error description')
            self.logger.error('Authentication failed: %s - %s', error, error_desc)
            raise GraphAuthenticationError(f'Authentication failed: {error} - {error_desc}')
        self.token = result['access_token']
        self.__save_cache__()
        return self.token

    def get_token(self) -> str:
        return self.__get_token__()

    def clear_token(self) -> 'MicrosoftGraphCredentials':
        '''Use this to clear a stale or invalid token.'''
        self.token = None
        return self
