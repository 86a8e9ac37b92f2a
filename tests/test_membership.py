"""
Tests for roster formatting and department resolution.

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

import os
import sys
import unittest
from unittest.mock import MagicMock

current_path = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, current_path)
while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
    current_path = os.path.dirname(current_path)
sys.path.append(current_path)
os.environ["TEAMAUDIT_ROOT"] = current_path

# pylint: disable=wrong-import-position
from audit.membership import MembershipResolver, abbreviate_name
from data_models import RosterMember
from fake_directory import person


class TestNames(unittest.TestCase):
    """Owner and member display strings."""

    def test_abbreviation(self):
        self.assertEqual(abbreviate_name("Adele Vance"), "AdelV")
        self.assertEqual(abbreviate_name("Megan Bowen Smith"), "MegaS")
        self.assertEqual(abbreviate_name("Al Wu"), "AlW")
        self.assertEqual(abbreviate_name("Cher"), "Cher")
        self.assertEqual(abbreviate_name("Madonna"), "Mado")
        self.assertEqual(abbreviate_name("   "), "")

    def test_small_roster_uses_full_names(self):
        members = [person(n) for n in ("Adele Vance", "Alex Wilber", "Diego Siciliani", "Grady Archie", "Isaiah Langer")]
        names = MembershipResolver.format_member_names(members)
        self.assertEqual(names, "Adele Vance; Alex Wilber; Diego Siciliani; Grady Archie; Isaiah Langer")

    def test_large_roster_is_abbreviated(self):
        members = [person(n) for n in ("Adele Vance", "Alex Wilber", "Diego Siciliani",
                                       "Grady Archie", "Isaiah Langer", "Johanna Lorenz")]
        names = MembershipResolver.format_member_names(members)
        self.assertEqual(names, "AdelV; AlexW; DiegS; GradA; IsaiL; JohaL")

    def test_owners_are_never_abbreviated(self):
        owners = [person(f"Owner Number{i}") for i in range(7)]
        self.assertIn("Owner Number0", MembershipResolver.format_owner_names(owners))

    def test_missing_display_names_are_skipped(self):
        members = [person("Adele Vance"), RosterMember(identity_id="svc"), RosterMember(display_name="  ")]
        self.assertEqual(MembershipResolver.format_member_names(members), "Adele Vance")


class TestDepartments(unittest.TestCase):
    """Department lookups are batched and deduplicated."""

    def test_batches_never_exceed_fifteen(self):
        members = [person(f"Member {i}", department=f"Dept{i % 3}") for i in range(32)]
        known = {m.identity_id: m.department for m in members}
        lookup = MagicMock(side_effect=lambda ids: [(i, known[i]) for i in ids])
        resolver = MembershipResolver(lookup)
        departments = resolver.resolve_departments(members)
        batch_sizes = [len(call.args[0]) for call in lookup.call_args_list]
        self.assertEqual(batch_sizes, [15, 15, 2])
        self.assertEqual(departments, "Dept0; Dept1; Dept2")

    def test_first_seen_order_and_blank_departments(self):
        members = [person("A B", "Sales"), person("C D", None), person("E F", "Legal"), person("G H", "Sales")]
        known = {m.identity_id: m.department for m in members}
        resolver = MembershipResolver(lambda ids: [(i, known[i]) for i in ids])
        self.assertEqual(resolver.resolve_departments(members), "Sales; Legal")

    def test_non_guid_identities_are_not_looked_up(self):
        members = [RosterMember(display_name="Guest", identity_id="guest#EXT#"), RosterMember(display_name="Nobody")]
        lookup = MagicMock(return_value=[])
        resolver = MembershipResolver(lookup)
        self.assertEqual(resolver.resolve_departments(members), "")
        lookup.assert_not_called()

    def test_non_canonical_guid_spellings_are_not_looked_up(self):
        canonical = person("Adele Vance", "Retail", identity_id="87d349ed-44d7-43e1-9a83-5f2406dee5bd")
        members = [
            canonical,
            person("Braced", "HR", identity_id="{5b1d3a2e-9c4f-4e8a-8d3b-2f6a7c9e1b04}"),
            person("Undashed", "HR", identity_id="5b1d3a2e9c4f4e8a8d3b2f6a7c9e1b04"),
        ]
        lookup = MagicMock(return_value=[(canonical.identity_id, "Retail")])
        resolver = MembershipResolver(lookup)
        self.assertEqual(resolver.resolve_departments(members), "Retail")
        lookup.assert_called_once_with([canonical.identity_id])

    def test_failed_lookup_marks_error(self):
        members = [person("Adele Vance", "Retail")]
        lookup = MagicMock(side_effect=RuntimeError("throttled"))
        resolver = MembershipResolver(lookup)
        self.assertEqual(resolver.resolve_departments(members), "Error retrieving")

    def test_batch_size_is_bounded(self):
        with self.assertRaises(ValueError):
            MembershipResolver(MagicMock(), batch_size=16)
        with self.assertRaises(ValueError):
            MembershipResolver(MagicMock(), batch_size=0)

    def test_resolve_counts(self):
        owners = [person("Adele Vance", "Retail")]
        members = [person("Alex Wilber", "Marketing"), person("Diego Siciliani", "HR")]
        known = {m.identity_id: m.department for m in owners + members}
        summary = MembershipResolver(lambda ids: [(i, known[i]) for i in ids]).resolve(owners, members)
        self.assertEqual(summary.owner_count, 1)
        self.assertEqual(summary.member_count, 2)
        self.assertEqual(summary.owner_names, "Adele Vance")
        self.assertEqual(summary.departments, "Marketing; HR")
        self.assertFalse(summary.is_empty_of_people)


if __name__ == "__main__":
    unittest.main()
