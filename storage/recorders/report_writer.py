'''
Writes the two audit reports (per-channel details and per-team summaries)
as JSON Lines and/or CSV files.

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
import datetime
import logging
import os
import sys
from collections.abc import Sequence

import jsonlines
import pandas as pd
from icecream import ic

if os.environ.get('TEAMAUDIT_ROOT') is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, 'TeamAudit.py')):
        current_path = os.path.dirname(current_path)
    os.environ['TEAMAUDIT_ROOT'] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from data_models import ChannelAuditRow, TeamAuditBaseModel, TeamSummaryRow
from utils.misc.directory_management import teamaudit_create_secure_directories
from utils.misc.file_name_management import generate_file_name
# pylint: enable=wrong-import-position


class AuditReportWriter:
    '''Writes audit rows to files in the output directory.'''

    detail_service = 'channeldetails'
    summary_service = 'teamsummary'
    formats = ('jsonl', 'csv', 'both')

    def __init__(self,
                 output_dir: str,
                 output_format: str = 'both',
                 timestamp: datetime.datetime | None = None):
        if output_format not in self.formats:
            raise ValueError(f'output_format must be one of {self.formats}, not {output_format}')
        self.output_dir = output_dir
        self.output_format = output_format
        self.timestamp = timestamp if timestamp is not None else datetime.datetime.now(datetime.UTC)
        self.logger = logging.getLogger(f'TeamAudit.{self.__class__.__name__}')

    def suffixes(self) -> list[str]:
        if self.output_format == 'both':
            return ['jsonl', 'csv']
        return [self.output_format]

    def generate_output_file_name(self, service: str, suffix: str) -> str:
        name = generate_file_name(
            service=service,
            timestamp=self.timestamp.isoformat(),
            suffix=suffix,
        )
        return os.path.join(self.output_dir, name)

    @staticmethod
    def write_jsonl(rows: Sequence[TeamAuditBaseModel], file_name: str) -> int:
        output_count = 0
        with jsonlines.open(file_name, mode='w') as writer:
            for row in rows:
                writer.write(row.to_export_record())
                output_count += 1
        return output_count

    @staticmethod
    def write_csv(rows: Sequence[TeamAuditBaseModel],
                  model: type[TeamAuditBaseModel],
                  file_name: str) -> int:
        df = pd.DataFrame([row.to_export_record() for row in rows], columns=model.export_columns())
        df.to_csv(file_name, index=False)
        return len(df)

    def write_rows(self,
                   rows: Sequence[TeamAuditBaseModel],
                   model: type[TeamAuditBaseModel],
                   service: str) -> list[str]:
        files = []
        for suffix in self.suffixes():
            file_name = self.generate_output_file_name(service, suffix)
            if suffix == 'jsonl':
                count = self.write_jsonl(rows, file_name)
            else:
                count = self.write_csv(rows, model, file_name)
            self.logger.info('Wrote %d rows to %s', count, file_name)
            ic('Wrote', count, 'rows to', file_name)
            files.append(file_name)
        return files

    def write(self,
              details: Sequence[ChannelAuditRow],
              summaries: Sequence[TeamSummaryRow]) -> list[str]:
        '''Write both reports; returns the paths written.'''
        teamaudit_create_secure_directories([self.output_dir])
        files = self.write_rows(details, ChannelAuditRow, self.detail_service)
        files += self.write_rows(summaries, TeamSummaryRow, self.summary_service)
        return files
