'''Collection of team data (collectors) and recording of audit reports (recorders).'''

__version__ = '0.1.0'
