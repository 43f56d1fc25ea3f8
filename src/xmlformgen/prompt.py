"""
Interactive terminal input for xmlformgen.
"""

import logging
import sys
from typing import Callable, Optional, TextIO

from .model import FieldDescriptor, FieldType, FormModel, ValueMap

logger = logging.getLogger(__name__)

# Answer that empties a field instead of keeping its current value
CLEAR_TOKEN = '-'


def collect_values(fields: FormModel, values: ValueMap,
                   input_func: Optional[Callable[[str], str]] = None,
                   stream: Optional[TextIO] = None) -> ValueMap:
    """
    Prompt the user for every editable field of a form.

    Display-only fields are printed for information. Fields whose type is not
    recognized are skipped, as they are not rendered.

    Args:
        fields: Field descriptors in form order
        values: Current value map (not modified)
        input_func: Function used to read a line of input (default: input)
        stream: Where prompts and messages are written (default: stderr)

    Returns:
        New value map with the entered values
    """
    input_func = input_func or input
    stream = stream or sys.stderr
    result = dict(values)

    for field in fields:
        if not field.renderable:
            continue

        if field.display_only:
            print(f'{field.label or field.id}: (display only)', file=stream)
            if field.comment:
                print(f'  {field.comment}', file=stream)
            continue

        if field.id not in result:
            logger.debug('Field %r has no value map entry, skipping', field.id)
            continue

        result[field.id] = prompt_field(field, result[field.id], input_func, stream)

    return result


def prompt_field(field: FieldDescriptor, current: str,
                 input_func: Callable[[str], str], stream: TextIO) -> str:
    """
    Read one field value, repeating the prompt until it is valid.

    An empty answer keeps the current value; CLEAR_TOKEN clears it.
    """
    if field.comment:
        print(f'  {field.comment}', file=stream)

    if field.field_type is FieldType.DROPDOWN:
        if not field.list_items:
            print(f'{field.label or field.id}: (no options)', file=stream)
            return current
        for index, item in enumerate(field.list_items, 1):
            print(f'  {index}) {item}', file=stream)

    marker = ' *' if field.mandatory else ''
    default = f' [{current}, {CLEAR_TOKEN} to clear]' if current else ''
    prompt = f'{field.label or field.id}{marker}{default}: '

    while True:
        stream.write(prompt)
        stream.flush()
        answer = input_func('').strip()

        if answer == CLEAR_TOKEN:
            answer = ''
        elif not answer:
            answer = current

        if not answer:
            if field.mandatory:
                print('  A value is required.', file=stream)
                continue
            return ''

        value, error = validate_answer(field, answer)
        if error:
            print(f'  {error}', file=stream)
            continue
        return value


def validate_answer(field: FieldDescriptor, answer: str):
    """
    Check an answer against the field type.

    Returns:
        Tuple of (value, error_message); error_message is None when valid
    """
    if field.field_type is FieldType.NUMBER:
        try:
            float(answer)
        except ValueError:
            return None, f'Not a number: {answer}'
        return answer, None

    if field.field_type is FieldType.DROPDOWN:
        if answer in field.list_items:
            return answer, None
        if answer.isdigit() and 1 <= int(answer) <= len(field.list_items):
            return field.list_items[int(answer) - 1], None
        return None, f'Choose one of the listed options (1-{len(field.list_items)})'

    return answer, None
