"""
Core orchestration for xmlformgen.
"""

import json
import logging
import sys
import tempfile
from typing import Dict, List, Optional

from .browser import launch_browser, path_to_url
from .forms import renderable_fields
from .model import ValueMap
from .output import CSV_FILENAME
from .prompt import collect_values
from .session import FormSession

logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_INTERNAL_ERROR = 1
EXIT_INVALID_FORM = 2
EXIT_READ_ERROR = 3
EXIT_BROWSER_LAUNCH_ERROR = 4
EXIT_INVALID_ARGUMENT = 5
EXIT_WRITE_ERROR = 6


def run_xmlformgen(args) -> int:
    """
    Main execution function for xmlformgen.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        # Step 1: Load XML content
        session = FormSession(strict_ids=args.strict_ids)
        xml_text = load_xml(args)
        if xml_text is None:
            return EXIT_READ_ERROR
        session.load_text(xml_text)

        # Step 2: Build the form model
        if not session.generate():
            print(f'Error: {session.error}', file=sys.stderr)
            return EXIT_INVALID_FORM

        logger.info('Generated form with %d fields (%d rendered, %d editable)',
                    len(session.fields), len(renderable_fields(session.fields)),
                    len(session.values))

        # Step 3: Apply values given on the command line
        try:
            values = load_values(args.values_json, args.value)
        except (OSError, ValueError) as e:
            print(f'Error: {e}', file=sys.stderr)
            return EXIT_INVALID_ARGUMENT

        try:
            session.update_values(values)
        except KeyError as e:
            print(f'Error: Unknown or non-editable field id: {e.args[0]}', file=sys.stderr)
            return EXIT_INVALID_ARGUMENT

        # Step 4: Render HTML and optionally open it
        if args.html_out is not None or args.launch_browser is not None:
            exit_code = render_form(session, args)
            if exit_code != EXIT_SUCCESS:
                return exit_code

        # Step 5: Prompt for values
        if args.interactive:
            session.update_values(collect_values(session.fields, session.values))

        # Step 6: Export CSV
        if args.stdout:
            sys.stdout.write(session.export_csv())
        else:
            output_path = args.output or CSV_FILENAME
            try:
                session.write_csv(output_path)
            except OSError as e:
                print(f'Error: Cannot write {output_path}: {e}', file=sys.stderr)
                return EXIT_WRITE_ERROR
            print(f'Wrote {output_path}', file=sys.stderr)

        return EXIT_SUCCESS

    except (KeyboardInterrupt, EOFError):
        print('\n\nInterrupted by user', file=sys.stderr)
        return EXIT_INTERNAL_ERROR
    except Exception as e:
        print(f'Internal error: {e}', file=sys.stderr)
        import traceback
        traceback.print_exc(file=sys.stderr)
        return EXIT_INTERNAL_ERROR


def load_xml(args) -> Optional[str]:
    """
    Load XML from the file argument or stdin.

    Args:
        args: Parsed command-line arguments

    Returns:
        XML string or None on error
    """
    try:
        if args.xmlfile and args.xmlfile != '-':
            with open(args.xmlfile, 'r', encoding='utf-8-sig') as f:
                return f.read()

        return read_stdin()

    except FileNotFoundError as e:
        print(f'Error: File not found: {e.filename}', file=sys.stderr)
        return None
    except PermissionError as e:
        print(f'Error: Permission denied: {e.filename}', file=sys.stderr)
        return None
    except (OSError, UnicodeDecodeError) as e:
        print(f'Error reading input: {e}', file=sys.stderr)
        return None


def read_stdin() -> str:
    """Read XML from stdin."""
    if sys.stdin.isatty():
        print('Reading XML from stdin (press Ctrl+D when done)...', file=sys.stderr)

    return sys.stdin.read()


def load_values(values_json: Optional[str], assignments: Optional[List[str]]) -> ValueMap:
    """
    Combine values from a JSON file and id=value assignments.

    Assignments override entries from the JSON file.

    Raises:
        ValueError: If the JSON file or an assignment is invalid
        OSError: If the JSON file cannot be read
    """
    values: Dict[str, str] = {}

    if values_json:
        with open(values_json, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f'Invalid JSON in {values_json}: {e}') from e
        values.update(parse_values_object(data))

    for assignment in assignments or []:
        field_id, sep, value = assignment.partition('=')
        if not sep:
            raise ValueError(f'Invalid value assignment: {assignment} (expected id=value)')
        values[field_id] = value

    return values


def parse_values_object(data) -> ValueMap:
    """Validate a decoded JSON values object and convert numbers to strings."""
    if not isinstance(data, dict):
        raise ValueError('Values file must contain a JSON object')

    values = {}
    for field_id, value in data.items():
        if isinstance(value, str):
            values[field_id] = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            values[field_id] = str(value)
        else:
            raise ValueError(f'Value for {field_id!r} must be a string or number')
    return values


def render_form(session: FormSession, args) -> int:
    """Write the HTML form and open it in a browser if requested."""
    html = session.render_html(title=args.title)

    try:
        if args.html_out:
            html_path = args.html_out
            with open(html_path, 'w', encoding='utf-8') as f:
                f.write(html)
        else:
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', suffix='.html',
                                             prefix='xmlformgen_', delete=False) as f:
                f.write(html)
                html_path = f.name
    except OSError as e:
        print(f'Error: Cannot write HTML form: {e}', file=sys.stderr)
        return EXIT_WRITE_ERROR

    logger.info('Rendered form written to %s', html_path)

    # args.launch_browser: None = not requested, '' = system default, path = custom browser
    if args.launch_browser is not None:
        if not launch_browser(path_to_url(html_path), args.launch_browser or None):
            print('Error: Could not launch browser', file=sys.stderr)
            return EXIT_BROWSER_LAUNCH_ERROR

    return EXIT_SUCCESS
