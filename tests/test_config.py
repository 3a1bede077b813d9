"""Tests for SniffConfig and SampleSize."""
import json

import pytest

from csvsniffer.config import DEFAULT_DELIMITERS, SampleSize, SniffConfig

ENV_VARS = [
    'CSVSNIFF_SAMPLE_BYTES',
    'CSVSNIFF_SAMPLE_RECORDS',
    'CSVSNIFF_MAX_ROWS',
    'CSVSNIFF_MIN_CONFIDENCE',
    'CSVSNIFF_DELIMITERS',
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSampleSize:

    def test_constructors(self):
        assert SampleSize.bytes(10) == SampleSize('bytes', 10)
        assert SampleSize.records(5) == SampleSize('records', 5)
        assert SampleSize.all().value is None

    @pytest.mark.parametrize("n", [0, -1])
    def test_limits_must_be_positive(self, n):
        with pytest.raises(ValueError):
            SampleSize.bytes(n)
        with pytest.raises(ValueError):
            SampleSize.records(n)

    def test_str(self):
        assert str(SampleSize.records(20)) == '20 records'
        assert str(SampleSize.all()) == 'all'


class TestSniffConfig:

    def test_defaults(self):
        config = SniffConfig()
        assert config.delimiters == DEFAULT_DELIMITERS
        assert config.min_confidence == 0.5
        assert config.sample_size == SampleSize.bytes(64 * 1024)

    def test_rejects_multi_character_delimiter(self):
        with pytest.raises(ValueError):
            SniffConfig(delimiters=['::'])

    def test_rejects_out_of_range_confidence(self):
        with pytest.raises(ValueError):
            SniffConfig(min_confidence=1.5)

    def test_dict_round_trip(self):
        config = SniffConfig(sample_size=SampleSize.records(50), delimiters=[';'], max_rows=10)
        restored = SniffConfig.from_dict(json.loads(config.to_json()))
        assert restored == config

    def test_from_dict_fills_defaults(self):
        assert SniffConfig.from_dict({}) == SniffConfig()


class TestFromEnv:

    def test_no_variables(self, clean_env):
        assert SniffConfig.from_env() == SniffConfig()

    def test_overrides(self, clean_env):
        clean_env.setenv('CSVSNIFF_SAMPLE_BYTES', '1024')
        clean_env.setenv('CSVSNIFF_MAX_ROWS', '25')
        clean_env.setenv('CSVSNIFF_MIN_CONFIDENCE', '0.8')
        clean_env.setenv('CSVSNIFF_DELIMITERS', ', tab ;')

        config = SniffConfig.from_env()
        assert config.sample_size == SampleSize.bytes(1024)
        assert config.max_rows == 25
        assert config.min_confidence == 0.8
        assert config.delimiters == [',', '\t', ';']

    def test_records_take_precedence_over_bytes(self, clean_env):
        clean_env.setenv('CSVSNIFF_SAMPLE_BYTES', '1024')
        clean_env.setenv('CSVSNIFF_SAMPLE_RECORDS', '30')
        assert SniffConfig.from_env().sample_size == SampleSize.records(30)

    def test_all(self, clean_env):
        clean_env.setenv('CSVSNIFF_SAMPLE_BYTES', 'all')
        assert SniffConfig.from_env().sample_size == SampleSize.all()

    def test_invalid_confidence(self, clean_env):
        clean_env.setenv('CSVSNIFF_MIN_CONFIDENCE', '2')
        with pytest.raises(ValueError):
            SniffConfig.from_env()
