"""The audit engine: membership, storage reconciliation and the deletion decision."""

import os
import sys

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from audit.decision import DeletionDecision, decide  # noqa: E402
from audit.membership import MembershipResolver, MembershipSummary  # noqa: E402
from audit.storage_reconciler import (  # noqa: E402
    ChannelProbe,
    ProbeOutcome,
    Reconciliation,
    StorageReconciler,
)
from audit.team_auditor import AuditReport, TeamAuditor, TeamAuditResult  # noqa: E402
# pylint: enable=wrong-import-position

__version__ = "0.1.0"

__all__ = [
    "AuditReport",
    "ChannelProbe",
    "DeletionDecision",
    "MembershipResolver",
    "MembershipSummary",
    "ProbeOutcome",
    "Reconciliation",
    "StorageReconciler",
    "TeamAuditResult",
    "TeamAuditor",
    "decide",
]
