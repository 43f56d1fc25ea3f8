"""
HTML form rendering for xmlformgen.
"""

import logging
from typing import Dict, List, Optional

from .model import FieldDescriptor, FieldType, FormModel, ValueMap

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'XML Form Generator'
DROPDOWN_PLACEHOLDER = 'Select an option'
PREVIEW_NOTE = ('Preview only. This page does not submit values; enter them with '
                'xmlformgen --interactive or --value id=value.')


def generate_form_html(fields: FormModel, values: Optional[ValueMap] = None) -> str:
    """
    Generate the HTML controls for a form model.

    Invisible fields and fields whose type is not recognized are skipped.
    The controls are wrapped in a div rather than a <form>: the page is a
    preview and has no submit target. Values are entered through the CLI.

    Args:
        fields: Field descriptors in form order
        values: Current values used to prefill the controls

    Returns:
        HTML string
    """
    values = values or {}
    form_parts = ['<div class="generated-form">']

    for field in fields:
        if not field.visible:
            continue
        if field.field_type is None:
            logger.debug('Skipping field %r with unrecognized type %r', field.id, field.type)
            continue
        form_parts.append(generate_field_html(field, values.get(field.id, '')))

    form_parts.append('</div>')

    return '\n'.join(form_parts)


def generate_field_html(field: FieldDescriptor, value: str = '') -> str:
    """
    Generate HTML for a single form field.

    Args:
        field: FieldDescriptor with a recognized type
        value: Current value of the field

    Returns:
        HTML string wrapped in a form-field div
    """
    required_html = ' <span class="required">*</span>' if field.mandatory else ''
    parts = [
        '    <div class="form-field">',
        f'        <label for="{escape_attr(field.id)}">{escape_html(field.label)}{required_html}</label>',
    ]

    if field.field_type is FieldType.TEXTAREA:
        parts.append(_generate_textarea(field, value))
    elif field.field_type is FieldType.DROPDOWN:
        parts.append(_generate_select(field, value))
    else:
        parts.append(_generate_input(field, value))

    if field.comment:
        parts.append(f'        <div class="field-comment">{escape_html(field.comment)}</div>')

    parts.append('    </div>')
    return '\n'.join(parts)


def _common_attrs(field: FieldDescriptor) -> Dict[str, Optional[str]]:
    """Attributes shared by every control type."""
    attrs: Dict[str, Optional[str]] = {
        'name': field.id,
        'id': field.id,
    }

    if field.mandatory:
        attrs['required'] = None

    if field.display_only:
        attrs['disabled'] = None

    if field.comment:
        attrs['title'] = field.comment

    return attrs


def _generate_input(field: FieldDescriptor, value: str) -> str:
    """Generate HTML for Text and Number inputs."""
    input_type = 'number' if field.field_type is FieldType.NUMBER else 'text'
    attrs = {'type': input_type}
    attrs.update(_common_attrs(field))
    attrs['value'] = value

    return '        ' + build_tag('input', attrs)


def _generate_textarea(field: FieldDescriptor, value: str) -> str:
    """Generate HTML for textarea elements."""
    return '        ' + build_tag('textarea', _common_attrs(field)) + escape_html(value) + '</textarea>'


def _generate_select(field: FieldDescriptor, value: str) -> str:
    """Generate HTML for Dropdown fields."""
    select_parts = ['        ' + build_tag('select', _common_attrs(field))]
    select_parts.append(f'            <option value="">{DROPDOWN_PLACEHOLDER}</option>')

    for item in field.list_items:
        selected = ' selected' if item == value else ''
        select_parts.append(
            f'            <option value="{escape_attr(item)}"{selected}>{escape_html(item)}</option>'
        )

    select_parts.append('        </select>')
    return '\n'.join(select_parts)


def build_tag(tag: str, attrs: Dict[str, Optional[str]]) -> str:
    """
    Build an HTML opening tag with attributes.

    Args:
        tag: Tag name
        attrs: Dictionary of attributes (value=None for boolean attributes)

    Returns:
        HTML tag string
    """
    attr_parts = []
    for key, value in attrs.items():
        if value is None:
            # Boolean attribute
            attr_parts.append(key)
        else:
            attr_parts.append(f'{key}="{escape_attr(value)}"')

    attr_str = ' ' + ' '.join(attr_parts) if attr_parts else ''
    return f'<{tag}{attr_str}>'


def escape_html(text: str) -> str:
    """Escape HTML special characters."""
    if not text:
        return ''
    return (text
            .replace('&', '&amp;')
            .replace('<', '&lt;')
            .replace('>', '&gt;')
            .replace('"', '&quot;')
            .replace("'", '&#x27;'))


def escape_attr(text: str) -> str:
    """Escape HTML attribute values."""
    if not text:
        return ''
    return (text
            .replace('&', '&amp;')
            .replace('"', '&quot;')
            .replace('<', '&lt;')
            .replace('>', '&gt;'))


def generate_form_document(fields: FormModel, values: Optional[ValueMap] = None,
                           title: Optional[str] = None) -> str:
    """
    Generate a complete HTML document for a form model.

    The document is a read-only preview: it has no <form> element and no
    submit button, and says so in a note above the fields.

    Args:
        fields: Field descriptors in form order
        values: Current values used to prefill the controls
        title: Page title (defaults to "XML Form Generator")

    Returns:
        Complete HTML document string
    """
    title = title or DEFAULT_TITLE
    form_html = generate_form_html(fields, values)

    return f'''<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape_html(title)}</title>
    <style>
        body {{
            font-family: system-ui, -apple-system, sans-serif;
            max-width: 600px;
            margin: 40px auto;
            padding: 20px;
        }}
        .form-field {{
            margin-bottom: 15px;
        }}
        label {{
            display: block;
            margin: 15px 0 5px;
            font-weight: 500;
        }}
        .required {{
            color: #c00;
        }}
        input, select, textarea {{
            width: 100%;
            padding: 8px;
            border: 1px solid #ccc;
            border-radius: 4px;
            box-sizing: border-box;
        }}
        input:disabled, select:disabled, textarea:disabled {{
            background: #eee;
        }}
        .field-comment {{
            margin-top: 4px;
            font-size: 0.9em;
            color: #666;
        }}
        .preview-note {{
            padding: 10px;
            background: #fff8e1;
            border: 1px solid #f0d98c;
            border-radius: 4px;
        }}
    </style>
</head>
<body>
    <h1>{escape_html(title)}</h1>
    <p class="preview-note">{PREVIEW_NOTE}</p>
    {form_html}
</body>
</html>'''


def renderable_fields(fields: FormModel) -> List[FieldDescriptor]:
    """Fields that generate_form_html will display."""
    return [f for f in fields if f.renderable]
