'''
singleton.py - This module is used to create singletons in TeamAudit.


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

class TeamAuditSingleton:
    '''Base class for process wide singletons (one instance per subclass).'''
    _instance = None
    _initialized = False

    def __new__(cls, *args, **kwargs):
        '''Return the shared instance of cls, creating it on first use.'''
        if cls.__dict__.get('_instance') is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        '''Drop the shared instance; the next construction starts over.'''
        cls._instance = None
        cls._initialized = False
