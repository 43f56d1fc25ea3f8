"""
Output formatting for xmlformgen (CSV export).
"""

import logging
from typing import List

from .model import FieldDescriptor, FormModel, ValueMap

logger = logging.getLogger(__name__)

CSV_FILENAME = 'form_data.csv'
CSV_CONTENT_TYPE = 'text/csv;charset=utf-8'

CSV_HEADERS = ['Id', 'Label', 'Type', 'Value', 'Visible', 'Mandatory', 'DisplayOnly', 'Comment']


def format_csv_output(fields: FormModel, values: ValueMap) -> str:
    """
    Format collected form values as CSV.

    Only visible fields are exported. Label, Value and Comment are quoted;
    Id and Type are written as-is.

    Args:
        fields: Field descriptors in form order
        values: Dictionary of field ids to entered values

    Returns:
        CSV text with a header row and a trailing newline
    """
    lines = [','.join(CSV_HEADERS)]

    for field in fields:
        if field.visible:
            lines.append(','.join(format_csv_row(field, values.get(field.id, ''))))

    return '\n'.join(lines) + '\n'


def format_csv_row(field: FieldDescriptor, value: str) -> List[str]:
    """Return the CSV cells for one field."""
    return [
        field.id,
        quote_csv_value(field.label),
        field.type,
        quote_csv_value(value),
        format_bool(field.visible),
        format_bool(field.mandatory),
        format_bool(field.display_only),
        quote_csv_value(field.comment),
    ]


def quote_csv_value(value: str) -> str:
    """Wrap value in double quotes, doubling any embedded quotes."""
    if not value:
        return '""'
    return '"' + value.replace('"', '""') + '"'


def format_bool(value: bool) -> str:
    return 'true' if value else 'false'


def write_csv_file(filepath: str, fields: FormModel, values: ValueMap):
    """
    Write the CSV export to a file.

    Args:
        filepath: Path to output file
        fields: Field descriptors in form order
        values: Dictionary of field ids to entered values
    """
    content = format_csv_output(fields, values)
    # newline='' keeps the \n row terminators on every platform
    with open(filepath, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    logger.info('Wrote %d bytes to %s', len(content.encode('utf-8')), filepath)
