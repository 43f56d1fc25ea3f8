"""
Form session state for xmlformgen.

A FormSession holds the state that a user works with between actions:
the uploaded XML buffer, the generated form and the values entered so far.

Example:
    session = FormSession()
    session.load_file('form.xml')
    if session.generate():
        session.set_value('email', 'user@example.com')
        csv_text = session.export_csv()
    else:
        print(session.error)
"""

import logging
from typing import Optional

from .errors import (
    DuplicateFieldIdError,
    EmptyInputError,
    FormParseError,
    MalformedXMLError,
    NoFieldsError,
)
from .forms import generate_form_document
from .model import FormModel, ParsedForm, ValueMap
from .output import format_csv_output, write_csv_file
from .parser import parse_form_xml

logger = logging.getLogger(__name__)

# User-facing messages for parse failures
MSG_NO_FILE = 'Please upload an XML file first'
MSG_INVALID_XML = 'Invalid XML file'
MSG_NO_FIELDS = 'No Field elements found in the XML'
MSG_PARSE_ERROR = 'Error parsing XML'


def error_message(error: Exception) -> str:
    """Map a parse failure to the message shown to the user."""
    if isinstance(error, EmptyInputError):
        return MSG_NO_FILE
    if isinstance(error, MalformedXMLError):
        return MSG_INVALID_XML
    if isinstance(error, NoFieldsError):
        return MSG_NO_FIELDS
    if isinstance(error, DuplicateFieldIdError):
        return error.message
    return f'{MSG_PARSE_ERROR}: {error}'


class FormSession:
    """Holds the XML buffer, the generated form and its live values."""

    def __init__(self, strict_ids: bool = False):
        self.strict_ids = strict_ids
        self.xml_content = ''
        self.form: Optional[ParsedForm] = None
        self.values: ValueMap = {}
        self.error: Optional[str] = None

    @property
    def fields(self) -> FormModel:
        return self.form.fields if self.form else []

    def load_text(self, text: str):
        """Store XML text to be parsed by the next generate() call."""
        self.error = None
        self.xml_content = text or ''

    def load_file(self, filepath: str):
        """
        Read an XML file into the buffer.

        The file is decoded as UTF-8; a leading byte order mark is dropped.
        """
        with open(filepath, 'r', encoding='utf-8-sig') as f:
            self.load_text(f.read())

    def generate(self) -> bool:
        """
        Parse the buffer and replace the current form.

        On failure the error message is stored in ``self.error`` and any
        previously generated form and its values are left untouched.

        Returns:
            True if a new form was generated
        """
        try:
            parsed = parse_form_xml(self.xml_content, strict_ids=self.strict_ids)
        except FormParseError as e:
            self.error = error_message(e)
            logger.info('Parse failed: %s', e)
            return False
        except Exception as e:
            self.error = error_message(e)
            logger.exception('Unexpected error while parsing XML')
            return False

        self.form = parsed
        self.values = dict(parsed.values)
        self.error = None
        return True

    def set_value(self, field_id: str, value: str):
        """
        Update the value of an editable field.

        Raises:
            KeyError: If field_id has no entry in the value map
        """
        if field_id not in self.values:
            raise KeyError(field_id)
        self.values[field_id] = value

    def update_values(self, values: ValueMap):
        """Set several values at once; every id must already exist."""
        unknown = [field_id for field_id in values if field_id not in self.values]
        if unknown:
            raise KeyError(', '.join(unknown))
        self.values.update(values)

    def _require_form(self) -> ParsedForm:
        if self.form is None:
            raise RuntimeError('No form has been generated')
        return self.form

    def export_csv(self) -> str:
        """Return the current values as CSV text."""
        return format_csv_output(self._require_form().fields, self.values)

    def write_csv(self, filepath: str):
        write_csv_file(filepath, self._require_form().fields, self.values)

    def render_html(self, title: Optional[str] = None) -> str:
        """Return the current form as a complete HTML document."""
        return generate_form_document(self._require_form().fields, self.values, title=title)
