"""Base classes for mlevels report models.

Copyright © 2024 The mlevels authors.
"""

from __future__ import annotations

import io
import json
import os
from pathlib import Path
from typing import Any, Mapping, Self

import pydantic
from ruamel import yaml
from ruamel.yaml.comments import CommentedMap


def _to_commented_map(data: Mapping[str, Any]) -> CommentedMap:
    """Convert nested mappings so that key order is kept on output."""
    return CommentedMap(
        (key, _to_commented_map(value) if isinstance(value, Mapping) else value)
        for key, value in data.items()
    )


class BaseReport(pydantic.BaseModel):
    """Base class for all mlevels reports.

    Reports can be written and read back as JSON or YAML documents. Computed
    fields are included on output and ignored on input.
    """

    @classmethod
    def from_json(cls, p: str | os.PathLike) -> Self:
        """Initialize a report from a JSON file.

        :param p: The path to the report file.
        :return: A report object.
        """
        with open(p) as fp:
            json_data = json.load(fp)

        return cls.model_validate(json_data)

    @classmethod
    def from_yaml(cls, p: str | os.PathLike) -> Self:
        """Initialize a report from a YAML file.

        :param p: The path to the report file.
        :return: A report object.
        """
        yaml_loader = yaml.YAML(typ="safe")
        with open(p) as fp:
            yaml_data = yaml_loader.load(fp)

        return cls.model_validate(yaml_data)

    def to_json(self, **kwargs: Any) -> str:  # noqa: DOC103
        """Dump the report to a json string.

        :param kwargs: Additional arguments to pass to `json.dumps`.
        :return: The report serialized to JSON as a string.
        """
        return json.dumps(self.model_dump(mode="json"), **kwargs)

    def to_yaml(self) -> str:
        """Dump the report to a YAML string.

        Fields are written in declaration order with two space indentation.

        :return: The report serialized to YAML as a string.
        """
        yaml_dumper = yaml.YAML()
        yaml_dumper.default_flow_style = False
        yaml_dumper.indent(mapping=2, sequence=4, offset=2)

        stream = io.StringIO()
        yaml_dumper.dump(_to_commented_map(self.model_dump(mode="json")), stream)
        return stream.getvalue()

    def write_json_file(self, p: str | os.PathLike, **kwargs: Any) -> None:
        """Write a JSON serialized report to a file.

        Non-existing intermediate directories in the path will be created.

        :param p: The path to the file to write.
        :param kwargs: Additional arguments to pass to pydantics `model_dump_json`.
        """
        Path(p).resolve().parent.mkdir(parents=True, exist_ok=True)

        with open(p, "w") as fp:
            r = self.model_dump_json(**kwargs)
            fp.write(r)

    def write_yaml_file(self, p: str | os.PathLike) -> None:
        """Write a YAML serialized report to a file.

        Non-existing intermediate directories in the path will be created.

        :param p: The path to the file to write.
        """
        Path(p).resolve().parent.mkdir(parents=True, exist_ok=True)

        with open(p, "w") as fp:
            fp.write(self.to_yaml())
