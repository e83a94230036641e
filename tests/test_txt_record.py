"""
tests/test_txt_record.py

TXT codec: fixed encode order, order-free decode, strict required keys.
"""

import warnings

import pytest

from walletdns.core.exceptions import MalformedRecordError
from walletdns.core.models import ExpiringVariant, Proof, SimpleVariant
from walletdns.core.txt import decode_txt_record, encode_txt_record, parse_txt_record

from tests.conftest import DEV_ADDRESS, EXPIRATION, TIMESTAMP

SIG = "0x" + "ab" * 65


@pytest.fixture
def expiring():
    return Proof(DEV_ADDRESS, "example.com", TIMESTAMP, ExpiringVariant(EXPIRATION), SIG)


@pytest.fixture
def simple():
    return Proof(DEV_ADDRESS, "example.com", TIMESTAMP, SimpleVariant(), SIG)


class TestEncode:

    def test_expiring_field_order(self, expiring):
        assert encode_txt_record(expiring) == (
            f"wallet={DEV_ADDRESS}&timestamp={TIMESTAMP}"
            f"&expiration={EXPIRATION}&sig={SIG}"
        )

    def test_simple_has_no_expiration(self, simple):
        assert encode_txt_record(simple) == (
            f"wallet={DEV_ADDRESS}&timestamp={TIMESTAMP}&sig={SIG}"
        )

    def test_nonce_never_published(self):
        proof = Proof(DEV_ADDRESS, "example.com", TIMESTAMP, SimpleVariant(nonce="secret"), SIG)
        assert "secret" not in encode_txt_record(proof)

    def test_unknown_variant_rejected(self):
        proof = Proof(DEV_ADDRESS, "example.com", TIMESTAMP, object(), SIG)
        with pytest.raises(TypeError):
            encode_txt_record(proof)


class TestDecode:

    def test_round_trip_expiring(self, expiring):
        fields = decode_txt_record(encode_txt_record(expiring))
        assert fields == {
            "wallet":     DEV_ADDRESS,
            "timestamp":  TIMESTAMP,
            "expiration": EXPIRATION,
            "sig":        SIG,
        }

    def test_round_trip_simple(self, simple):
        assert parse_txt_record(encode_txt_record(simple), "example.com") == simple

    def test_any_order(self):
        txt = f"sig={SIG}&expiration={EXPIRATION}&wallet={DEV_ADDRESS}&timestamp={TIMESTAMP}"
        fields = decode_txt_record(txt)
        assert fields["wallet"] == DEV_ADDRESS
        assert fields["expiration"] == EXPIRATION

    def test_unknown_keys_ignored(self):
        txt = f"v=1&wallet={DEV_ADDRESS}&timestamp={TIMESTAMP}&sig={SIG}&extra=x"
        assert set(decode_txt_record(txt)) == {"wallet", "timestamp", "sig"}

    def test_quoted_value(self):
        txt = f'"wallet={DEV_ADDRESS}&timestamp={TIMESTAMP}&sig={SIG}"'
        assert decode_txt_record(txt)["sig"] == SIG

    @pytest.mark.parametrize("missing", ["wallet", "timestamp", "sig"])
    def test_missing_required_key(self, missing):
        fields = {"wallet": DEV_ADDRESS, "timestamp": TIMESTAMP, "sig": SIG}
        del fields[missing]
        txt = "&".join(f"{k}={v}" for k, v in fields.items())
        with pytest.raises(MalformedRecordError) as exc:
            decode_txt_record(txt)
        assert missing in str(exc.value)

    def test_empty_value_counts_as_missing(self):
        with pytest.raises(MalformedRecordError):
            decode_txt_record(f"wallet={DEV_ADDRESS}&timestamp={TIMESTAMP}&sig=")

    @pytest.mark.parametrize("txt", ["", "   ", '""', "garbage", "wallet&timestamp&sig"])
    def test_unparsable(self, txt):
        with pytest.raises(MalformedRecordError):
            decode_txt_record(txt)

    def test_non_string(self):
        with pytest.raises(MalformedRecordError):
            decode_txt_record(None)

    def test_non_numeric_timestamp(self):
        with pytest.raises(MalformedRecordError):
            decode_txt_record(f"wallet={DEV_ADDRESS}&timestamp=yesterday&sig={SIG}")

    def test_non_numeric_expiration(self):
        with pytest.raises(MalformedRecordError):
            decode_txt_record(
                f"wallet={DEV_ADDRESS}&timestamp={TIMESTAMP}&expiration=never&sig={SIG}"
            )

    def test_value_may_contain_equals(self):
        fields = decode_txt_record(f"wallet={DEV_ADDRESS}&timestamp={TIMESTAMP}&sig=a=b")
        assert fields["sig"] == "a=b"

    def test_duplicate_key_keeps_first(self):
        txt = f"wallet={DEV_ADDRESS}&wallet=0xother&timestamp={TIMESTAMP}&sig={SIG}"
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            fields = decode_txt_record(txt)
        assert fields["wallet"] == DEV_ADDRESS
        assert len(w) == 1


class TestParse:

    def test_domain_comes_from_caller(self, expiring):
        proof = parse_txt_record(encode_txt_record(expiring), "other.org")
        assert proof.domain_name == "other.org"

    def test_variant_inferred(self, expiring, simple):
        assert isinstance(parse_txt_record(encode_txt_record(expiring), "x").variant, ExpiringVariant)
        assert isinstance(parse_txt_record(encode_txt_record(simple), "x").variant, SimpleVariant)
