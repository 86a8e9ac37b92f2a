'''
This module builds and parses the file names TeamAudit uses for its report
and log files.  Names are a sequence of key=value labels separated by
hyphens, which is why none of the labels may contain a hyphen.

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

if os.environ.get('TEAMAUDIT_ROOT') is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, 'TeamAudit.py')):
        current_path = os.path.dirname(current_path)
    os.environ['TEAMAUDIT_ROOT'] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
import utils.misc.timestamp_management
from constants.values import TeamAuditConstants
# pylint: enable=wrong-import-position

teamaudit_file_name_prefix = TeamAuditConstants.default_prefix

def generate_final_name(args : list, **kwargs) -> str:
    '''
    This is a helper function for generate_file_name.  The positional
    values arrive as a list: prefix, platform, service, timestamp label,
    suffix, maximum length.
    '''
    prefix = args[0]
    target_platform = args[1]
    service = args[2]
    ts = args[3]
    suffix = args[4]
    max_len = args[5]
    name = prefix
    if '-' in prefix:
        raise ValueError('prefix must not contain a hyphen')
    if '-' in suffix:
        raise ValueError('suffix must not contain a hyphen')
    if target_platform: # platform is optional
        name += f'-plt={target_platform}'
    name += f'-svc={service}'
    for key, value in kwargs.items():
        assert isinstance(value, str), f'value must be a string: {key, value}'
        if '-' in key:
            raise ValueError(f'key must not contain a hyphen: {key, value}')
        if '-' in value:
            raise ValueError(f'value must not contain a hyphen: {key, value}')
        name += f'-{key}={value}'
    if ts is not None:
        name += ts
    name += f'.{suffix}'
    if len(name) > max_len:
        raise ValueError('file name is too long' + '\n' + name + '\n' + str(len(name)))
    return name

def generate_file_name(**kwargs) -> str:
    '''
    Given a key/value store of labels and values, this generates a file
    name in a common format.
    Special labels:
        * prefix: string to prepend to the file name (default is teamaudit)
        * platform: identifies the platform from which the data originated
          (optional)
        * service: identifies the service that generated the data (no default)
        * timestamp: timestamp to use in the file name (default is the
          current time, None omits it)
        * suffix: string to append to the file name (default is jsonl)
    '''
    max_len = 255
    prefix = teamaudit_file_name_prefix
    suffix = 'jsonl'
    if 'max_len' in kwargs:
        max_len = kwargs['max_len']
        if isinstance(max_len, str):
            max_len = int(max_len)
        if not isinstance(max_len, int):
            raise ValueError('max_len must be an integer')
        del kwargs['max_len']
    if 'platform' not in kwargs:
        target_platform = None
    else:
        target_platform = kwargs['platform']
        del kwargs['platform']
    if 'service' not in kwargs:
        raise ValueError('service must be specified')
    service = kwargs['service']
    del kwargs['service']
    ts = utils.misc.timestamp_management.generate_iso_timestamp_for_file()
    if 'timestamp' in kwargs:
        if kwargs['timestamp'] is not None:
            ts = utils.misc.timestamp_management.generate_iso_timestamp_for_file(kwargs['timestamp'])
        else:
            ts = None
        del kwargs['timestamp']
    if 'prefix' in kwargs:
        prefix = kwargs['prefix']
        del kwargs['prefix']
    if 'suffix' in kwargs:
        suffix = kwargs['suffix']
        del kwargs['suffix']
    if suffix.startswith('.'):
        suffix = suffix[1:] # avoid ".." for suffix
    if target_platform and '-' in target_platform:
        raise ValueError(f'platform must not contain a hyphen (platform={target_platform})')
    if '-' in service:
        raise ValueError(f'service must not contain a hyphen (service={service})')

    return generate_final_name(
        [prefix,
        target_platform,
        service,
        ts,
        suffix,
        max_len],
        **kwargs)
