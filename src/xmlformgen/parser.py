"""
XML parsing for xmlformgen.

Turns a form description document into a list of FieldDescriptor objects.
"""

import logging
import xml.etree.ElementTree as ET
from collections import Counter
from typing import Iterator, List, Optional

from .errors import (
    DuplicateFieldIdError,
    EmptyInputError,
    MalformedXMLError,
    NoFieldsError,
)
from .model import FieldDescriptor, FormModel, ParsedForm, ValueMap

logger = logging.getLogger(__name__)

FIELD_TAG = 'Field'
LIST_TAG = 'List'
ITEM_TAG = 'Item'

# Literal accepted as boolean true; anything else is false
TRUE_LITERAL = 'true'


def parse_form_xml(xml_text: Optional[str], strict_ids: bool = False) -> ParsedForm:
    """
    Parse a form description document.

    Args:
        xml_text: Raw XML content
        strict_ids: Reject documents where two fields share a non-empty id

    Returns:
        ParsedForm with the field descriptors and the seeded value map

    Raises:
        EmptyInputError: If xml_text is empty
        MalformedXMLError: If xml_text is not well-formed XML
        NoFieldsError: If the document has no <Field> elements
        DuplicateFieldIdError: If strict_ids is set and an id repeats
    """
    if not xml_text:
        raise EmptyInputError()

    root = parse_document(xml_text)

    field_elements = list(iter_tag(root, FIELD_TAG))
    if not field_elements:
        raise NoFieldsError()

    fields = [parse_field(element) for element in field_elements]

    if not fields:
        raise NoFieldsError('No valid fields found in the XML')

    duplicates = find_duplicate_ids(fields)
    if duplicates:
        if strict_ids:
            raise DuplicateFieldIdError(duplicates)
        logger.warning('Fields share ids, their values will collide: %s', ', '.join(duplicates))

    logger.debug('Parsed %d fields (%d visible)', len(fields), sum(1 for f in fields if f.visible))
    return ParsedForm(fields=fields, values=seed_values(fields))


def parse_document(xml_text: str) -> ET.Element:
    """Parse XML text, converting parser failures to MalformedXMLError."""
    try:
        return ET.fromstring(xml_text)
    except ET.ParseError as e:
        line, column = getattr(e, 'position', (None, None))
        raise MalformedXMLError(f'Invalid XML: {e}', line=line, column=column) from e


def parse_field(element: ET.Element) -> FieldDescriptor:
    """
    Build a FieldDescriptor from a <Field> element.

    Missing children fall back to empty strings and False.
    """
    return FieldDescriptor(
        id=child_text(element, 'Id'),
        label=child_text(element, 'Label'),
        type=child_text(element, 'Type'),
        list_items=parse_list_items(element),
        visible=child_flag(element, 'Visible'),
        mandatory=child_flag(element, 'Mandatory'),
        display_only=child_flag(element, 'DisplayOnly'),
        comment=child_text(element, 'Comment'),
    )


def local_name(tag) -> str:
    """Tag name without its '{namespace}' prefix."""
    if not isinstance(tag, str):
        return ''
    return tag.rsplit('}', 1)[-1]


def iter_tag(element: ET.Element, tag: str) -> Iterator[ET.Element]:
    """Iterate over element and its descendants whose local name is tag."""
    for candidate in element.iter():
        if local_name(candidate.tag) == tag:
            yield candidate


def first_descendant(element: ET.Element, tag: str) -> Optional[ET.Element]:
    """Return the first element below element with the given tag."""
    for candidate in iter_tag(element, tag):
        if candidate is not element:
            return candidate
    return None


def text_content(element: ET.Element) -> str:
    """Concatenated text of element and all its descendants, trimmed."""
    return ''.join(element.itertext()).strip()


def child_text(element: ET.Element, tag: str) -> str:
    child = first_descendant(element, tag)
    if child is None:
        return ''
    return text_content(child)


def child_flag(element: ET.Element, tag: str) -> bool:
    # Case-sensitive: "True" and "1" are false
    return child_text(element, tag) == TRUE_LITERAL


def parse_list_items(element: ET.Element) -> List[str]:
    """Collect non-empty <Item> texts from the field's first <List>."""
    list_element = first_descendant(element, LIST_TAG)
    if list_element is None:
        return []

    items = []
    for item in iter_tag(list_element, ITEM_TAG):
        text = text_content(item)
        if text:
            items.append(text)
    return items


def seed_values(fields: FormModel) -> ValueMap:
    """
    Build the initial value map for a form model.

    Every editable field (visible and not display-only) gets an empty string.
    """
    return {f.id: '' for f in fields if f.editable}


def find_duplicate_ids(fields: FormModel) -> List[str]:
    """Return non-empty ids used by more than one field, in first-seen order."""
    counts = Counter(f.id for f in fields if f.id)
    return [field_id for field_id, count in counts.items() if count > 1]
