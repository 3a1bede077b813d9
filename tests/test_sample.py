"""Tests for sample reading and decoding."""
import io

from csvsniffer.config import SampleSize
from csvsniffer.sample import decode_sample, read_sample, snip_preamble, trim_partial_record

DATA = b"a,b\n1,2\n3,4\n5,6\n"


class TestReadSample:

    def test_byte_limit(self):
        assert read_sample(io.BytesIO(DATA), SampleSize.bytes(6)) == (b"a,b\n1,", True)

    def test_byte_limit_covering_everything(self):
        assert read_sample(io.BytesIO(DATA), SampleSize.bytes(len(DATA))) == (DATA, False)

    def test_record_limit(self):
        assert read_sample(io.BytesIO(DATA), SampleSize.records(2)) == (b"a,b\n1,2\n", True)
        assert read_sample(io.BytesIO(DATA), SampleSize.records(4)) == (DATA, False)

    def test_all(self):
        assert read_sample(io.BytesIO(DATA), SampleSize.all()) == (DATA, False)

    def test_text_stream(self):
        assert read_sample(io.StringIO("x;y\n"), SampleSize.all()) == (b"x;y\n", False)

    def test_rewinds_to_starting_position(self):
        stream = io.BytesIO(DATA)
        stream.readline()
        data, _ = read_sample(stream, SampleSize.all())
        assert data == DATA[4:]
        assert stream.tell() == 4


class TestDecodeSample:

    def test_utf8(self):
        assert decode_sample("naïve".encode('utf-8')) == ("naïve", True)

    def test_bom_is_stripped(self):
        assert decode_sample(b"\xef\xbb\xbfa,b\n") == ("a,b\n", True)

    def test_latin1_fallback(self):
        assert decode_sample(b"caf\xe9\n") == ("caf\xe9\n", False)

    def test_cut_multibyte_character_in_truncated_sample(self):
        assert decode_sample(b"ab\xc3", truncated=True) == ("ab", True)

    def test_cut_multibyte_character_without_truncation(self):
        assert decode_sample(b"ab\xc3") == ("ab\xc3", False)


class TestHelpers:

    def test_trim_partial_record(self):
        assert trim_partial_record("a,b\n1,2\n3,") == "a,b\n1,2\n"
        assert trim_partial_record("a,b\r\n1,2") == "a,b\r\n"
        assert trim_partial_record("a,b") == "a,b"

    def test_snip_preamble(self):
        stream = io.BytesIO(b"title\n\na,b\n")
        snip_preamble(stream, 2)
        assert stream.read() == b"a,b\n"

    def test_snip_past_end(self):
        stream = io.BytesIO(b"title\n")
        snip_preamble(stream, 5)
        assert stream.read() == b""
