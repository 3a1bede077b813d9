"""Tests for the csvsniff command line."""
import json

import pytest
from click.testing import CliRunner

from csvsniffer.cli.main import cli

pytestmark = pytest.mark.cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def report_path(write_file, example_sample):
    return write_file("report.csv", example_sample)


class TestSniffCommand:

    def test_report(self, runner, report_path):
        result = runner.invoke(cli, ['sniff', str(report_path)])
        assert result.exit_code == 0, result.output
        assert "Integer" in result.output
        assert "Boolean" in result.output
        assert "active" in result.output

    def test_json(self, runner, report_path):
        result = runner.invoke(cli, ['sniff', '--json', str(report_path)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output.strip())
        assert data['path'] == str(report_path)
        assert data['fields'] == ['id', 'name', 'active']
        assert data['dialect']['num_preamble_rows'] == 2

    def test_failures_do_not_stop_other_files(self, runner, report_path, tmp_path):
        missing = str(tmp_path / "missing.csv")
        result = runner.invoke(cli, ['sniff', '--json', missing, str(report_path)])
        assert result.exit_code == 1
        lines = [json.loads(line) for line in result.output.strip().splitlines()]
        assert 'error' in lines[0]
        assert lines[1]['types'] == ['Integer', 'Text', 'Boolean']

    def test_unsniffable_file(self, runner, write_file):
        path = write_file("empty.csv", "")
        result = runner.invoke(cli, ['sniff', str(path)])
        assert result.exit_code == 1
        assert "empty" in result.output

    def test_fixed_delimiter_alias(self, runner, write_file):
        path = write_file("data.tsv", "a\tb\n1\t2\n3\t4\n")
        result = runner.invoke(cli, ['sniff', '--json', '--delimiter', 'tab', str(path)])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)['dialect']['delimiter'] == '\t'

    def test_bad_delimiter(self, runner, report_path):
        result = runner.invoke(cli, ['sniff', '--delimiter', '::', str(report_path)])
        assert result.exit_code == 2

    def test_conflicting_sample_options(self, runner, report_path):
        result = runner.invoke(cli, ['sniff', '--sample-bytes', '10', '--all', str(report_path)])
        assert result.exit_code == 2
        assert "only one of" in result.output


class TestPreviewCommand:

    def test_preview(self, runner, report_path):
        result = runner.invoke(cli, ['preview', '--rows', '1', str(report_path)])
        assert result.exit_code == 0, result.output
        assert "Alice" in result.output
        assert "Bob" not in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ['preview', str(tmp_path / "missing.csv")])
        assert result.exit_code == 1
