#!/usr/bin/env python3
"""
Example: Using xmlformgen as a Python library
"""

from pathlib import Path

from xmlformgen import FormSession, parse_form_xml, format_csv_output
from xmlformgen.prompt import collect_values

SAMPLE_XML = Path(__file__).with_name('sample_form.xml')


# Example 1: Parse and export with fixed values
def export_fixed_values():
    """Fill a form from a dictionary and print the CSV."""
    form = parse_form_xml(SAMPLE_XML.read_text(encoding='utf-8'))

    values = dict(form.values)
    values['name'] = 'Jane "JJ" Doe'
    values['age'] = '42'
    values['country'] = 'Canada'

    print(format_csv_output(form.fields, values), end='')


# Example 2: Prompt on the terminal and write form_data.csv
def fill_interactively():
    """Collect values on the terminal and write them to form_data.csv."""
    session = FormSession()
    session.load_file(str(SAMPLE_XML))

    if not session.generate():
        print(f"✗ {session.error}")
        return None

    session.update_values(collect_values(session.fields, session.values))
    session.write_csv('form_data.csv')
    print("✓ Wrote form_data.csv")
    return session.values


# Example 3: Render the form as HTML
def render_html():
    """Write the form to form.html."""
    session = FormSession()
    session.load_file(str(SAMPLE_XML))

    if session.generate():
        Path('form.html').write_text(session.render_html(title='Registration'), encoding='utf-8')
        print("✓ Wrote form.html")
    else:
        print(f"✗ {session.error}")


if __name__ == '__main__':
    import sys

    print("xmlformgen Python API Examples")
    print("=" * 50)

    if len(sys.argv) > 1:
        example = sys.argv[1]
        if example == 'export':
            export_fixed_values()
        elif example == 'prompt':
            fill_interactively()
        elif example == 'html':
            render_html()
        else:
            print(f"Unknown example: {example}")
            print("Usage: python python_api_example.py [export|prompt|html]")
    else:
        print("\nUsage: python python_api_example.py [export|prompt|html]")
        print("\nExamples:")
        print("  python python_api_example.py export  - Export fixed values as CSV")
        print("  python python_api_example.py prompt  - Fill the form on the terminal")
        print("  python python_api_example.py html    - Render the form as HTML")
