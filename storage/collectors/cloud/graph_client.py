'''
A small synchronous client for the Microsoft Graph REST API: authenticated
GET requests with timeouts, bounded retries and @odata.nextLink paging.

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
import threading
import time
from collections.abc import Iterator
from typing import Any

import requests

if os.environ.get('TEAMAUDIT_ROOT') is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, 'TeamAudit.py')):
        current_path = os.path.dirname(current_path)
    os.environ['TEAMAUDIT_ROOT'] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from constants import TeamAuditConstants
from storage.collectors.base import TeamAuditError
from storage.collectors.cloud.graph_credentials import MicrosoftGraphCredentials
# pylint: enable=wrong-import-position


class GraphRequestError(TeamAuditError):
    '''A Graph request failed; status_code is None when no response arrived.'''

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GraphClient:
    '''Authenticated GET access to Microsoft Graph.'''

    retryable_status_codes = (429, 500, 502, 503, 504)

    def __init__(self,
                 credentials: MicrosoftGraphCredentials,
                 endpoint: str = TeamAuditConstants.graph_api_endpoint,
                 timeout: tuple[int, int] = TeamAuditConstants.graph_request_timeout,
                 max_retries: int = TeamAuditConstants.graph_max_retries,
                 retry_delay: float = 5.0,
                 session: requests.Session | None = None):
        self.credentials = credentials
        self.endpoint = endpoint.rstrip('/')
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._session = session
        self._local = threading.local()
        self.logger = logging.getLogger(f'TeamAudit.{self.__class__.__name__}')

    @property
    def session(self) -> requests.Session:
        '''The injected session, otherwise one session per worker thread.'''
        if self._session is not None:
            return self._session
        session = getattr(self._local, 'session', None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def get_headers(self) -> dict:
        '''This method returns the headers for the request with the current
        token.'''
        return {
            'Authorization': 'Bearer ' + self.credentials.get_token(),
            'Accept': 'application/json',
        }

    def get_url(self, path: str) -> str:
        if path.startswith('https://'):
            return path
        return f'{self.endpoint}/{path.lstrip("/")}'

    def retry_wait(self, response: requests.Response | None) -> float:
        if response is not None and 'Retry-After' in response.headers:
            try:
                return float(response.headers['Retry-After'])
            except ValueError:
                pass
        return self.retry_delay

    def get(self, path: str, params: dict | None = None) -> requests.Response:
        '''
        GET with retries.  Timeouts, throttling (429) and server errors are
        retried up to max_retries times; a 401 clears the token and is
        retried once.  Anything else raises GraphRequestError.
        '''
        url = self.get_url(path)
        tid = threading.get_ident()
        retries = self.max_retries
        refreshed = False
        while True:
            response = None
            try:
                self.logger.debug('%s Fetching %s', tid, url)
                response = self.session.get(url, headers=self.get_headers(), params=params, timeout=self.timeout)
            except requests.exceptions.Timeout as e:
                if retries <= 0:
                    raise GraphRequestError(f'Request to {url} timed out: {e}') from e
                retries -= 1
                self.logger.warning('%s Request timed out: %s. Retrying %d more times.', tid, e, retries)
                time.sleep(self.retry_delay)
                continue
            except requests.exceptions.RequestException as e:
                raise GraphRequestError(f'Request to {url} failed: {e}') from e
            if response.status_code == 401 and not refreshed:
                # seems to indicate a stale token
                self.logger.info('%s Request failed (401).  Refresh token.', tid)
                self.credentials.clear_token()
                refreshed = True
                continue
            if response.status_code in self.retryable_status_codes and retries > 0:
                retries -= 1
                wait = self.retry_wait(response)
                self.logger.warning('%s Request to %s returned %d. Retrying in %.0fs, %d more times.',
                                    tid, url, response.status_code, wait, retries)
                time.sleep(wait)
                continue
            if not response.ok:
                self.logger.error('Error: for URL %s - %s - %s', url, response.status_code, response.text)
                raise GraphRequestError(
                    f'Request to {url} failed: {response.status_code} - {response.text}',
                    status_code=response.status_code,
                )
            return response

    def get_json(self, path: str, params: dict | None = None) -> dict[str, Any]:
        return self.get(path, params=params).json()

    def get_text(self, path: str, params: dict | None = None) -> str:
        '''Report downloads are UTF-8 CSV with a byte order mark.'''
        return self.get(path, params=params).content.decode('utf-8-sig')

    def get_paged(self, path: str, params: dict | None = None) -> Iterator[dict[str, Any]]:
        '''Yield every item of a collection, following @odata.nextLink.'''
        url = path
        while url:
            data = self.get_json(url, params=params)
            yield from data.get('value', [])
            url = data.get('@odata.nextLink')
            params = None  # the next link already carries the query
