"""
Command-line interface for xmlformgen.
"""

import argparse
import logging
import sys


class XmlFormGenArgumentParser:
    """Custom argument parser for xmlformgen."""

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog='xmlformgen',
            description='Build a form from an XML field description and export the entered values as CSV'
        )
        self._setup_arguments()

    def _setup_arguments(self):
        """Configure all command-line arguments."""

        self.parser.add_argument(
            'xmlfile',
            nargs='?',
            metavar='<xmlfile>',
            help='XML file describing the form fields (default: read from stdin)'
        )

        # Value sources
        values_group = self.parser.add_argument_group('field values')
        values_group.add_argument(
            '--value',
            action='append',
            metavar='<id=value>',
            help='Set the value of a field. May be specified multiple times.'
        )
        values_group.add_argument(
            '--values-json',
            metavar='<path>',
            help='JSON file with an object mapping field ids to values'
        )
        values_group.add_argument(
            '--interactive', '-i',
            action='store_true',
            help='Prompt for each editable field on the terminal'
        )

        # CSV output
        output_group = self.parser.add_argument_group('output')
        output_group.add_argument(
            '--output', '-o',
            metavar='<path>',
            help='Write CSV to this file (default: form_data.csv)'
        )
        output_group.add_argument(
            '--stdout',
            action='store_true',
            help='Print CSV to stdout instead of writing form_data.csv'
        )

        # HTML rendering
        render_group = self.parser.add_argument_group('form rendering')
        render_group.add_argument(
            '--html-out',
            metavar='<path>',
            help='Write the rendered HTML form to this file'
        )
        render_group.add_argument(
            '--title',
            metavar='<string>',
            help='Page title shown above the rendered form'
        )
        render_group.add_argument(
            '--launch-browser',
            nargs='?',
            const='',
            metavar='<path>',
            help='Open the rendered form in a web browser (system default if no path provided)'
        )

        # Parsing
        parsing_group = self.parser.add_argument_group('parsing')
        parsing_group.add_argument(
            '--strict-ids',
            action='store_true',
            help='Reject forms in which two fields share an id'
        )

        self.parser.add_argument(
            '--verbose', '-v',
            action='count',
            default=0,
            help='Increase log output (-v for info, -vv for debug)'
        )

    def parse_args(self, args=None):
        """Parse command-line arguments and validate."""
        parsed = self.parser.parse_args(args)
        self._validate_args(parsed)
        return parsed

    def _validate_args(self, args):
        """Validate argument combinations."""
        if args.interactive and (args.xmlfile is None or args.xmlfile == '-'):
            self.parser.error('--interactive requires <xmlfile>; stdin is needed for prompts')

        if args.stdout and args.output:
            self.parser.error('--stdout and --output cannot be combined')

        for item in args.value or []:
            if '=' not in item:
                self.parser.error(f'--value must be in the form id=value, got: {item}')


def configure_logging(verbosity: int):
    """Send log records to stderr at a level chosen by -v flags."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr
    )


def main():
    """Main entry point for xmlformgen CLI."""
    parser = XmlFormGenArgumentParser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    # Import here to avoid circular dependencies
    from .core import run_xmlformgen

    try:
        return run_xmlformgen(args)
    except KeyboardInterrupt:
        print('\n\nInterrupted by user', file=sys.stderr)
        return 1
    except Exception as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
