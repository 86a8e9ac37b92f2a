"""
Reconciles a team's declared channels against the folders of its document
library.

The channel list and the folder tree are maintained independently by the
platform.  Standard and shared channels keep their files in a folder of the
team's default library named after the channel; private channels get a
library of their own.  Folders that no declared channel accounts for are
reported as orphans.

Every evaluation produces a ChannelProbe: the content state plus a typed
outcome that says how the state was reached.  Expected conditions (folder
not found, private library not provisioned) are outcomes, not exceptions.

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
"""

import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

# pylint: disable=wrong-import-position
from constants import TeamAuditConstants
from data_models import Channel, ContentState, StorageItem
from storage.collectors.base import FatalAuditError, TeamDirectorySource
from utils.misc.size_format import format_size
# pylint: enable=wrong-import-position


class ProbeOutcome(str, Enum):
    """How a channel's content state was determined"""

    FOUND = "found"
    ROOT_FILES = "root_files"
    NOT_FOUND = "not_found"
    UNRESOLVED = "unresolved"
    LOOKUP_ERROR = "lookup_error"
    SIZE_WITHOUT_ITEMS = "size_without_items"
    COUNT_MISMATCH = "count_mismatch"
    ORPHANED = "orphaned"


@dataclass(frozen=True)
class ChannelProbe:
    """The result of evaluating one channel (or one orphaned folder)."""

    channel_name: str
    state: ContentState
    outcome: ProbeOutcome
    size: str
    item_count: str
    status: str


@dataclass(frozen=True)
class Reconciliation:
    """All probes for a team, declared channels first, then orphans."""

    probes: tuple[ChannelProbe, ...]
    orphans: tuple[str, ...]

    @property
    def has_any_data(self) -> bool:
        return bool(self.orphans) or any(p.state != ContentState.NO for p in self.probes)


def find_orphans(root_items: Sequence[StorageItem], processed_names: set[str]) -> list[str]:
    """Top level folder names that are not the name of any processed channel, in listing order."""
    return [item.name for item in root_items if item.is_folder and item.name not in processed_names]


class StorageReconciler:
    """Classifies channel content for one team at a time."""

    def __init__(self, source: TeamDirectorySource):
        self.source = source
        self.logger = logging.getLogger(f"TeamAudit.{self.__class__.__name__}")

    def reconcile(self,
                  team_id: str,
                  channels: Sequence[Channel],
                  root_items: Sequence[StorageItem]) -> Reconciliation:
        """
        Evaluate every declared channel, then derive the orphans from the
        names processed.  Orphan detection runs only after all channels are
        done, so it does not depend on the order channels are evaluated in.
        """
        processed_names: set[str] = set()
        probes: list[ChannelProbe] = []
        for channel in channels:
            processed_names.add(channel.display_name)
            try:
                if channel.is_private:
                    probe = self.probe_private_channel(team_id, channel)
                else:
                    probe = self.probe_library_channel(team_id, channel, root_items)
            except FatalAuditError:
                raise
            except Exception as e:  # pylint: disable=broad-exception-caught
                self.logger.error("Unexpected failure evaluating channel %s of team %s: %s",
                                  channel.display_name, team_id, e)
                probe = ChannelProbe(
                    channel_name=channel.display_name,
                    state=ContentState.ERROR,
                    outcome=ProbeOutcome.LOOKUP_ERROR,
                    size=TeamAuditConstants.error_text,
                    item_count=TeamAuditConstants.error_text,
                    status=f"Error: {e}",
                )
            probes.append(probe)
        orphans = find_orphans(root_items, processed_names)
        for name in orphans:
            folder = next(item for item in root_items if item.is_folder and item.name == name)
            probes.append(ChannelProbe(
                channel_name=f"{name}{TeamAuditConstants.orphan_suffix}",
                state=ContentState.NEEDS_MANUAL_REVIEW,
                outcome=ProbeOutcome.ORPHANED,
                size=format_size(folder.size),
                item_count=f"Reported {folder.child_count}",
                status=TeamAuditConstants.orphan_status,
            ))
        if orphans:
            self.logger.info("Team %s has %d orphaned folder(s): %s", team_id, len(orphans), orphans)
        return Reconciliation(probes=tuple(probes), orphans=tuple(orphans))

    def probe_private_channel(self, team_id: str, channel: Channel) -> ChannelProbe:
        """A private channel is judged by the root of its own library."""
        try:
            root = self.source.get_private_channel_root(team_id, channel.id)
        except FatalAuditError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            self.logger.warning("Private channel root lookup failed for %s: %s", channel.display_name, e)
            return ChannelProbe(
                channel_name=channel.display_name,
                state=ContentState.ERROR,
                outcome=ProbeOutcome.LOOKUP_ERROR,
                size=TeamAuditConstants.error_text,
                item_count=TeamAuditConstants.error_text,
                status=f"Private channel lookup failed: {e}",
            )
        if root is None:
            return ChannelProbe(
                channel_name=channel.display_name,
                state=ContentState.NEEDS_MANUAL_REVIEW,
                outcome=ProbeOutcome.UNRESOLVED,
                size=TeamAuditConstants.not_applicable_text,
                item_count=TeamAuditConstants.not_applicable_text,
                status="Private channel library could not be resolved",
            )
        has_items = root.child_count > 0
        return ChannelProbe(
            channel_name=channel.display_name,
            state=ContentState.YES if has_items else ContentState.NO,
            outcome=ProbeOutcome.FOUND,
            size=format_size(root.size),
            item_count=f"Reported {root.child_count}",
            status="Private channel library has items" if has_items else "Private channel library is empty",
        )

    def probe_library_channel(self,
                              team_id: str,
                              channel: Channel,
                              root_items: Sequence[StorageItem]) -> ChannelProbe:
        """Standard and shared channels live in a folder of the team's default library."""
        folder = next((item for item in root_items
                       if item.is_folder and item.name == channel.display_name), None)
        if folder is None:
            if channel.display_name.casefold() == TeamAuditConstants.general_channel_name.casefold():
                return self.probe_root_files(channel, root_items)
            return ChannelProbe(
                channel_name=channel.display_name,
                state=ContentState.NO,
                outcome=ProbeOutcome.NOT_FOUND,
                size=format_size(0),
                item_count=TeamAuditConstants.not_applicable_text,
                status="Channel folder not found",
            )
        try:
            children = self.source.get_folder_children(team_id, folder.id)
        except FatalAuditError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            # the folder itself is known, so the row is still partially informative
            self.logger.warning("Could not enumerate folder %s of team %s: %s", folder.name, team_id, e)
            return ChannelProbe(
                channel_name=channel.display_name,
                state=ContentState.NEEDS_MANUAL_REVIEW,
                outcome=ProbeOutcome.LOOKUP_ERROR,
                size=format_size(folder.size),
                item_count=f"Enumerated ? / Reported {folder.child_count}",
                status=f"Could not enumerate channel folder: {e}",
            )
        return self.classify_folder(channel.display_name, folder, children)

    @staticmethod
    def classify_folder(channel_name: str,
                        folder: StorageItem,
                        children: Sequence[StorageItem]) -> ChannelProbe:
        """
        Files directly in the folder, or sub-folders that report children,
        mean content.  Then two overrides, in this order: a folder with a
        size but no visible content, and a folder whose enumeration does
        not agree with its reported count, both need manual review.
        """
        if any(child.is_file for child in children):
            state, status = ContentState.YES, "Files found"
        elif any(child.is_folder and child.child_count > 0 for child in children):
            state, status = ContentState.YES, "Files in sub-folders"
        elif children:
            state, status = ContentState.NO, "Only empty sub-folders"
        else:
            state, status = ContentState.NO, "Folder is empty"
        outcome = ProbeOutcome.FOUND
        if folder.size > 0 and state == ContentState.NO:
            state = ContentState.NEEDS_MANUAL_REVIEW
            outcome = ProbeOutcome.SIZE_WITHOUT_ITEMS
            status = "Folder has size but no visible items (metadata or hidden items)"
        if len(children) != folder.child_count:
            state = ContentState.NEEDS_MANUAL_REVIEW
            outcome = ProbeOutcome.COUNT_MISMATCH
            status = f"Item count mismatch (enumerated {len(children)}, reported {folder.child_count})"
        return ChannelProbe(
            channel_name=channel_name,
            state=state,
            outcome=outcome,
            size=format_size(folder.size),
            item_count=f"Enumerated {len(children)} / Reported {folder.child_count}",
            status=status,
        )

    @staticmethod
    def probe_root_files(channel: Channel, root_items: Sequence[StorageItem]) -> ChannelProbe:
        """The General channel may have no folder; files at the library root then belong to it."""
        files = [item for item in root_items if item.is_file]
        return ChannelProbe(
            channel_name=channel.display_name,
            state=ContentState.YES if files else ContentState.NO,
            outcome=ProbeOutcome.ROOT_FILES if files else ProbeOutcome.NOT_FOUND,
            size=format_size(sum(item.size for item in files)),
            item_count=f"{len(files)} file(s) at library root",
            status=("No channel folder; files at library root" if files
                    else "No channel folder and no files at library root"),
        )
