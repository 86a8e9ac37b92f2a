"""Constants shared across TeamAudit."""

from constants.values import TeamAuditConstants

__all__ = ['TeamAuditConstants']
