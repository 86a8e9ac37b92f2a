"""initializtion logic for the team activity index."""

import os
import sys

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

from activity.activity_index import ActivityIndex, inactivity_cutoff  # noqa: E402

__version__ = "0.1.0"

__all__ = ["ActivityIndex", "inactivity_cutoff"]
