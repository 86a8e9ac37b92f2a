"""
This module defines the base data model for the TeamAudit related data models.

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

import json
import os
import sys
from typing import Any, TypeVar

from icecream import ic
from pydantic import BaseModel

if os.environ.get("TEAMAUDIT_ROOT") is None:
    current_path = os.path.dirname(os.path.abspath(__file__))
    while not os.path.exists(os.path.join(current_path, "TeamAudit.py")):
        current_path = os.path.dirname(current_path)
    os.environ["TEAMAUDIT_ROOT"] = current_path
    sys.path.append(current_path)

T = TypeVar("T", bound="TeamAuditBaseModel")


class TeamAuditBaseModel(BaseModel):
    """
    This expands upon the base model and provides common methods that we use
    when moving TeamAudit records in and out of JSON and the report files.
    """

    def serialize(self) -> dict[str, Any]:
        """Serialize the object to a dictionary"""
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)

    @classmethod
    def deserialize(cls: type[T], data: dict[str, Any]) -> T:
        """Deserialize the object from a dictionary"""
        if isinstance(data, str):
            return cls(**json.loads(data))
        elif isinstance(data, dict):
            return cls(**data)
        else:
            raise ValueError(f"Expected str or dict, got {type(data)}")

    @classmethod
    def get_json_example(cls: type[T]) -> dict:
        """This will return a JSON compatible encoding as a python dictionary"""
        return json.loads(
            cls(**cls.model_config["json_schema_extra"]["example"]).model_dump_json(),
        )

    @classmethod
    def get_example(cls: type[T]) -> T:
        return cls(**cls.get_json_example())

    @classmethod
    def get_json_schema(cls) -> dict:
        """Returns the JSON schema for the data model in Python dictionary format."""
        return cls.get_example().model_json_schema()

    def to_export_record(self) -> dict[str, Any]:
        """
        Returns the record keyed by its column headings (the serialization
        aliases), which is the shape the report writers consume.
        """
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def export_columns(cls) -> list[str]:
        """Column headings in field order, used when there are no rows to infer them from"""
        return [info.serialization_alias or name for name, info in cls.model_fields.items()]

    @classmethod
    def test_model_main(cls: type[T]) -> None:
        """This function can be used to do basic testing of the data model."""
        data = cls.get_example()
        ic(data)
        print(data.model_dump_json(indent=2, exclude_unset=True, exclude_none=True))
        serial_data = data.serialize()
        data_check = cls.deserialize(serial_data)
        assert data_check == data
        ic(cls.get_json_schema())


def main():
    """This allows testing the data model."""
    ic("Currently no test code for TeamAuditBaseModel")


if __name__ == "__main__":
    main()
