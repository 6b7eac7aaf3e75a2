"""Variable-binding tags: ``<m-var>``, ``<m-scope>`` and ``<m-data>``."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mooltipage._types import MimeType
from mooltipage.environment.exceptions import ErrorCode, TemplateSyntaxError
from mooltipage.nodes.base import TagNode

DATA_TYPES = (MimeType.JSON, MimeType.TEXT)


class MVarNode(TagNode):
    """Binds its attributes into the parent's scope, then disappears."""

    __slots__ = ()

    def __init__(self, attributes: Mapping[str, Any] | None = None):
        super().__init__("m-var", attributes)


class MScopeNode(TagNode):
    """Binds its attributes into its own scope, visible to descendants only."""

    __slots__ = ()

    def __init__(self, attributes: Mapping[str, Any] | None = None):
        super().__init__("m-scope", attributes)


@dataclass(frozen=True, slots=True)
class DataReference:
    """One ``var-name="res/path"`` pair declared on an ``<m-data>`` tag."""

    var_name: str
    res_path: str


class MDataNode(TagNode):
    """Loads external resources and binds them into the parent's scope.

    Example:
        >>> node = MDataNode(MimeType.JSON, {"config": "config.json"})
        >>> node.references
        [DataReference(var_name='config', res_path='config.json')]
    """

    __slots__ = ()

    def __init__(self, mime_type: MimeType | str, references: Mapping[str, Any] | None = None):
        attrs = dict(references) if references else {}
        attrs["type"] = mime_type.value if isinstance(mime_type, MimeType) else mime_type
        super().__init__("m-data", attrs)
        # Validates eagerly.
        _ = self.type

    @property
    def type(self) -> MimeType:
        raw = self.get_required_value_attribute("type")
        try:
            mime_type = MimeType.from_value(raw)
        except ValueError:
            mime_type = None
        if mime_type not in DATA_TYPES:
            raise TemplateSyntaxError(
                f"<m-data> type must be one of {', '.join(t.value for t in DATA_TYPES)}, got '{raw}'",
                tag_name="m-data",
                code=ErrorCode.INVALID_ATTRIBUTE,
            )
        return mime_type

    @property
    def references(self) -> list[DataReference]:
        refs: list[DataReference] = []
        for name, value in self.attributes.items():
            if name == "type":
                continue
            if value is None:
                raise TemplateSyntaxError(
                    f"<m-data> reference '{name}' is missing a resource path",
                    tag_name="m-data",
                    code=ErrorCode.MISSING_ATTRIBUTE,
                )
            refs.append(DataReference(name, str(value)))
        return refs
