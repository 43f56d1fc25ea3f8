"""
xmlformgen - Build forms from XML field descriptions and export the entered values as CSV.

Programmatic Usage:

    from xmlformgen import parse_form_xml, format_csv_output

    form = parse_form_xml(xml_text)
    values = dict(form.values)         # seeded with '' for every editable field
    values['email'] = 'user@example.com'
    csv_text = format_csv_output(form.fields, values)

    # Or keep the state in a session
    from xmlformgen import FormSession

    session = FormSession()
    session.load_file('form.xml')
    if session.generate():
        session.set_value('email', 'user@example.com')
        session.write_csv('form_data.csv')
    else:
        print(session.error)
"""

__version__ = "0.1.0"

from xmlformgen.errors import (
    FormParseError,
    EmptyInputError,
    MalformedXMLError,
    NoFieldsError,
    DuplicateFieldIdError,
)
from xmlformgen.model import FieldDescriptor, FieldType, ParsedForm
from xmlformgen.parser import parse_form_xml, seed_values
from xmlformgen.output import format_csv_output, write_csv_file, CSV_FILENAME, CSV_CONTENT_TYPE
from xmlformgen.forms import generate_form_html, generate_form_document
from xmlformgen.session import FormSession

__all__ = [
    # Parsing
    'parse_form_xml',
    'seed_values',
    'FieldDescriptor',
    'FieldType',
    'ParsedForm',
    # Errors
    'FormParseError',
    'EmptyInputError',
    'MalformedXMLError',
    'NoFieldsError',
    'DuplicateFieldIdError',
    # Output
    'format_csv_output',
    'write_csv_file',
    'CSV_FILENAME',
    'CSV_CONTENT_TYPE',
    # Rendering
    'generate_form_html',
    'generate_form_document',
    # State
    'FormSession',
]
