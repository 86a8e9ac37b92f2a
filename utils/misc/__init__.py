"""Miscellaneous helpers for TeamAudit."""
