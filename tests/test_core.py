"""
Integration tests for the xmlformgen command flow.
"""

import io
import json

import pytest
from xmlformgen import core
from xmlformgen.cli import XmlFormGenArgumentParser
from xmlformgen.core import (
    EXIT_BROWSER_LAUNCH_ERROR,
    EXIT_INVALID_ARGUMENT,
    EXIT_INVALID_FORM,
    EXIT_READ_ERROR,
    EXIT_SUCCESS,
    EXIT_WRITE_ERROR,
    load_values,
    parse_values_object,
    run_xmlformgen,
)


FORM_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<Form>
  <Field>
    <Id>name</Id><Label>Name</Label><Type>Text</Type>
    <Visible>true</Visible><Mandatory>true</Mandatory><DisplayOnly>false</DisplayOnly>
    <Comment>Your "full" name</Comment>
  </Field>
  <Field>
    <Id>color</Id><Label>Color</Label><Type>Dropdown</Type>
    <List><Item>Red</Item><Item>Blue</Item></List>
    <Visible>true</Visible><Mandatory>false</Mandatory><DisplayOnly>false</DisplayOnly>
  </Field>
  <Field>
    <Id>ref</Id><Label>Ref</Label><Type>Text</Type>
    <Visible>true</Visible><DisplayOnly>true</DisplayOnly>
  </Field>
  <Field>
    <Id>hidden</Id><Type>Text</Type><Visible>false</Visible>
  </Field>
</Form>
'''

EXPECTED_HEADER = 'Id,Label,Type,Value,Visible,Mandatory,DisplayOnly,Comment'


@pytest.fixture
def form_file(tmp_path):
    path = tmp_path / 'form.xml'
    path.write_text(FORM_XML, encoding='utf-8')
    return path


def run(argv):
    args = XmlFormGenArgumentParser().parse_args(argv)
    return run_xmlformgen(args)


class TestRunXmlFormGen:
    """Test the end-to-end command flow."""

    def test_stdout_export(self, form_file, capsys):
        exit_code = run([str(form_file), '--stdout', '--value', 'name=Ann', '--value', 'color=Blue'])
        assert exit_code == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert out == (
            EXPECTED_HEADER + '\n'
            'name,"Name",Text,"Ann",true,true,false,"Your ""full"" name"\n'
            'color,"Color",Dropdown,"Blue",true,false,false,""\n'
            'ref,"Ref",Text,"",true,false,true,""\n'
        )

    def test_default_output_file(self, form_file, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert run([str(form_file)]) == EXIT_SUCCESS

        csv_path = tmp_path / 'form_data.csv'
        assert csv_path.exists()
        assert csv_path.read_text(encoding='utf-8').startswith(EXPECTED_HEADER + '\n')
        assert 'Wrote form_data.csv' in capsys.readouterr().err

    def test_output_path(self, form_file, tmp_path):
        out = tmp_path / 'answers.csv'
        assert run([str(form_file), '-o', str(out), '--value', 'name=Zoë']) == EXIT_SUCCESS
        assert '"Zoë"' in out.read_text(encoding='utf-8')

    def test_missing_file(self, tmp_path, capsys):
        assert run([str(tmp_path / 'missing.xml'), '--stdout']) == EXIT_READ_ERROR
        assert 'File not found' in capsys.readouterr().err

    def test_invalid_xml(self, tmp_path, capsys):
        path = tmp_path / 'bad.xml'
        path.write_text('<notxml', encoding='utf-8')
        assert run([str(path), '--stdout']) == EXIT_INVALID_FORM
        assert 'Error: Invalid XML file' in capsys.readouterr().err

    def test_empty_file(self, tmp_path, capsys):
        path = tmp_path / 'empty.xml'
        path.write_text('', encoding='utf-8')
        assert run([str(path), '--stdout']) == EXIT_INVALID_FORM
        assert 'Please upload an XML file first' in capsys.readouterr().err

    def test_no_fields(self, tmp_path, capsys):
        path = tmp_path / 'nofields.xml'
        path.write_text('<Form/>', encoding='utf-8')
        assert run([str(path), '--stdout']) == EXIT_INVALID_FORM
        assert 'No Field elements found in the XML' in capsys.readouterr().err

    def test_strict_ids(self, tmp_path, capsys):
        path = tmp_path / 'dup.xml'
        path.write_text('<Form><Field><Id>a</Id></Field><Field><Id>a</Id></Field></Form>', encoding='utf-8')
        assert run([str(path), '--stdout', '--strict-ids']) == EXIT_INVALID_FORM
        assert 'Duplicate field ids: a' in capsys.readouterr().err

    def test_unknown_field_value(self, form_file, capsys):
        assert run([str(form_file), '--stdout', '--value', 'nope=1']) == EXIT_INVALID_ARGUMENT
        assert 'Unknown or non-editable field id: nope' in capsys.readouterr().err

    def test_display_only_value_rejected(self, form_file):
        assert run([str(form_file), '--stdout', '--value', 'ref=1']) == EXIT_INVALID_ARGUMENT

    def test_values_json(self, form_file, tmp_path, capsys):
        values_path = tmp_path / 'values.json'
        values_path.write_text(json.dumps({'name': 'Kim', 'color': 'Red'}), encoding='utf-8')
        assert run([str(form_file), '--stdout', '--values-json', str(values_path),
                    '--value', 'name=Lee']) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert 'name,"Name",Text,"Lee"' in out
        assert 'color,"Color",Dropdown,"Red"' in out

    def test_values_json_invalid(self, form_file, tmp_path, capsys):
        values_path = tmp_path / 'values.json'
        values_path.write_text('{not json', encoding='utf-8')
        assert run([str(form_file), '--stdout', '--values-json', str(values_path)]) == EXIT_INVALID_ARGUMENT
        assert 'Invalid JSON' in capsys.readouterr().err

    def test_stdin_input(self, monkeypatch, capsys):
        monkeypatch.setattr('sys.stdin', io.StringIO(FORM_XML))
        assert run(['--stdout']) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith(EXPECTED_HEADER)

    def test_html_out(self, form_file, tmp_path, capsys):
        html_path = tmp_path / 'form.html'
        assert run([str(form_file), '--stdout', '--html-out', str(html_path),
                    '--title', 'Survey', '--value', 'name=Ann']) == EXIT_SUCCESS

        html = html_path.read_text(encoding='utf-8')
        assert '<title>Survey</title>' in html
        assert 'value="Ann"' in html
        assert 'id="hidden"' not in html
        assert 'Preview only.' in html
        assert '<button' not in html

    def test_html_out_unwritable(self, form_file, tmp_path):
        html_path = tmp_path / 'no-such-dir' / 'form.html'
        assert run([str(form_file), '--stdout', '--html-out', str(html_path)]) == EXIT_WRITE_ERROR

    def test_launch_browser(self, form_file, tmp_path, monkeypatch, capsys):
        opened = []
        monkeypatch.setattr(core, 'launch_browser', lambda url, path=None: opened.append((url, path)) or True)
        html_path = tmp_path / 'form.html'

        assert run([str(form_file), '--stdout', '--html-out', str(html_path), '--launch-browser']) == EXIT_SUCCESS
        assert opened == [(html_path.resolve().as_uri(), None)]

    def test_launch_browser_temp_file(self, form_file, monkeypatch, capsys):
        opened = []
        monkeypatch.setattr(core, 'launch_browser', lambda url, path=None: opened.append(url) or True)

        assert run([str(form_file), '--stdout', '--launch-browser', '/opt/browser']) == EXIT_SUCCESS
        assert len(opened) == 1
        assert opened[0].startswith('file://')
        assert opened[0].endswith('.html')

    def test_launch_browser_failure(self, form_file, monkeypatch, capsys):
        monkeypatch.setattr(core, 'launch_browser', lambda url, path=None: False)
        assert run([str(form_file), '--stdout', '--launch-browser']) == EXIT_BROWSER_LAUNCH_ERROR

    def test_interactive(self, form_file, monkeypatch, capsys):
        replies = iter(['Ann', '1'])
        monkeypatch.setattr('builtins.input', lambda prompt='': next(replies))
        assert run([str(form_file), '--stdout', '--interactive']) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert 'name,"Name",Text,"Ann"' in out
        assert 'color,"Color",Dropdown,"Red"' in out

    def test_interactive_clears_prefilled_value(self, form_file, monkeypatch, capsys):
        replies = iter(['', '-'])
        monkeypatch.setattr('builtins.input', lambda prompt='': next(replies))
        assert run([str(form_file), '--stdout', '--interactive',
                    '--value', 'name=Ann', '--value', 'color=Blue']) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert 'name,"Name",Text,"Ann"' in out
        assert 'color,"Color",Dropdown,"",' in out


class TestLoadValues:
    """Test combining value sources."""

    def test_assignments(self):
        assert load_values(None, ['a=1', 'b=', 'c=x=y']) == {'a': '1', 'b': '', 'c': 'x=y'}

    def test_assignment_without_equals(self):
        with pytest.raises(ValueError):
            load_values(None, ['broken'])

    def test_missing_json_file(self, tmp_path):
        with pytest.raises(OSError):
            load_values(str(tmp_path / 'missing.json'), None)

    def test_numbers_converted(self):
        assert parse_values_object({'age': 42, 'score': 1.5}) == {'age': '42', 'score': '1.5'}

    def test_rejects_non_object(self):
        with pytest.raises(ValueError, match='JSON object'):
            parse_values_object(['a'])

    def test_rejects_nested_values(self):
        with pytest.raises(ValueError, match="'a'"):
            parse_values_object({'a': {'b': 1}})

    def test_rejects_booleans(self):
        with pytest.raises(ValueError):
            parse_values_object({'a': True})
