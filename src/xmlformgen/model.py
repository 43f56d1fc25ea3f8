"""
Form model types for xmlformgen.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class FieldType(Enum):
    """Field types the renderer knows how to display."""

    TEXT = 'Text'
    NUMBER = 'Number'
    TEXTAREA = 'Textarea'
    DROPDOWN = 'Dropdown'

    @classmethod
    def from_string(cls, value: str) -> Optional['FieldType']:
        """Return the matching member, or None for an unrecognized type."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One form field, as described by a <Field> element.

    The raw ``type`` string is kept verbatim because it is also the value
    written to the CSV export; ``field_type`` gives the recognized variant.

    Attributes:
        id: Key used for the value map and the CSV Id column
        label: Human-readable caption
        type: Type string from the XML (open-ended)
        list_items: Options for Dropdown fields
        visible: Whether the field is shown and exported
        mandatory: Whether a value is required
        display_only: Whether the field is shown but not editable
        comment: Help text shown next to the field
    """
    id: str = ''
    label: str = ''
    type: str = ''
    list_items: List[str] = field(default_factory=list)
    visible: bool = False
    mandatory: bool = False
    display_only: bool = False
    comment: str = ''

    @property
    def field_type(self) -> Optional[FieldType]:
        return FieldType.from_string(self.type)

    @property
    def editable(self) -> bool:
        """Editable fields are the ones that get a value map entry."""
        return self.visible and not self.display_only

    @property
    def renderable(self) -> bool:
        return self.visible and self.field_type is not None


# Ordered field descriptors of one document
FormModel = List[FieldDescriptor]

# User-entered values keyed by field id
ValueMap = Dict[str, str]


@dataclass
class ParsedForm:
    """
    Result of a successful parse.

    Attributes:
        fields: Field descriptors in document order
        values: Value map seeded with an empty string per editable field
    """
    fields: FormModel
    values: ValueMap = field(default_factory=dict)
