import pytest

from thaiqr.errors import OversizedFieldError
from thaiqr.promptpay import crc16
from thaiqr.tlv import TlvField, format_tlv


class TestCrc16:
    def test_empty_string(self):
        assert crc16("") == "FFFF"

    def test_check_vector(self):
        # CRC-16/CCITT-FALSE check value
        assert crc16("123456789") == "29B1"

    def test_deterministic(self):
        s = "00020101021129370016A000000677010111"
        assert crc16(s) == crc16(s)

    def test_four_uppercase_hex(self):
        result = crc16("test")
        assert len(result) == 4
        assert result == result.upper()
        int(result, 16)


class TestFormatTlv:
    def test_simple(self):
        assert format_tlv("00", "01") == "000201"

    def test_pads_length(self):
        assert format_tlv("58", "TH") == "5802TH"
        assert format_tlv("00", "A000000677010111") == "0016A000000677010111"

    def test_empty_value(self):
        assert format_tlv("62", "") == "6200"

    def test_max_length(self):
        assert format_tlv("02", "9" * 99) == "0299" + "9" * 99

    def test_oversized_rejected(self):
        with pytest.raises(OversizedFieldError) as exc:
            format_tlv("02", "9" * 100)
        assert exc.value.tag == "02"
        assert exc.value.length == 100

    def test_length_counts_bytes(self):
        assert format_tlv("02", "ก") == "0203ก"

    def test_bad_tag(self):
        with pytest.raises(ValueError):
            format_tlv("5", "TH")

    def test_field_serialize(self):
        assert TlvField("53", "764").serialize() == "5303764"
