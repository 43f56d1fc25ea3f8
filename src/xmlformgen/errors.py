"""
Exceptions raised while building a form model from XML.
"""

from typing import List, Optional


class FormParseError(Exception):
    """Base class for errors raised by the form parser."""

    default_message = 'Error parsing XML'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptyInputError(FormParseError):
    """Raised when no XML content was supplied."""

    default_message = 'No file supplied'


class MalformedXMLError(FormParseError):
    """Raised when the XML content is not well-formed."""

    default_message = 'Invalid XML'

    def __init__(self, message: Optional[str] = None, line: Optional[int] = None,
                 column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column


class NoFieldsError(FormParseError):
    """Raised when the document contains no <Field> elements."""

    default_message = 'No Field elements found in the XML'


class DuplicateFieldIdError(FormParseError):
    """Raised in strict mode when two fields share an id."""

    def __init__(self, duplicate_ids: List[str]):
        self.duplicate_ids = duplicate_ids
        super().__init__(f'Duplicate field ids: {", ".join(duplicate_ids)}')
