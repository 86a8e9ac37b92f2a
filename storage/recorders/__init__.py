'''Writers for the audit reports.'''

import os
import sys

if os.environ.get('TEAMAUDIT_ROOT') is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, 'TeamAudit.py')):
        current_path = os.path.dirname(current_path)
    os.environ['TEAMAUDIT_ROOT'] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from storage.recorders.report_writer import AuditReportWriter
# pylint: enable=wrong-import-position

__all__ = ['AuditReportWriter']
