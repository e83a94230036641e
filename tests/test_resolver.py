"""
tests/test_resolver.py

TxtResolver against a stub dns.resolver.Resolver.
"""

import dns.exception
import dns.resolver
import pytest

from walletdns.core.exceptions import RecordNotFoundError, ResolutionError
from walletdns.resolver import TxtResolver, record_name


class _Rdata:
    def __init__(self, *strings: bytes):
        self.strings = strings


class _Answer:
    def __init__(self, rdatas):
        self._rdatas = list(rdatas)
        self.rrset = self._rdatas or None

    def __iter__(self):
        return iter(self._rdatas)


class _StubResolver:
    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.queries = []
        self.timeout = None
        self.lifetime = None

    def resolve(self, qname, rdtype, raise_on_no_answer=True):
        self.queries.append((qname, rdtype))
        if self.error is not None:
            raise self.error
        return self.answer


class TestRecordName:

    def test_label_prefix(self):
        assert record_name("example.com") == "aqua._wallet.example.com"

    def test_trailing_dot(self):
        assert record_name("example.com.") == "aqua._wallet.example.com"

    def test_custom_label(self):
        assert record_name("example.com", "_proof") == "_proof.example.com"

    def test_empty(self):
        with pytest.raises(ValueError):
            record_name("  ")


class TestTxtResolver:

    def test_joins_character_strings(self):
        stub = _StubResolver(_Answer([_Rdata(b"wallet=0xabc&timestamp=1", b"&sig=0x12")]))
        resolver = TxtResolver(timeout=1.0, lifetime=2.0, resolver=stub)
        assert resolver.fetch_txt_records("example.com") == [
            "wallet=0xabc&timestamp=1&sig=0x12"
        ]
        assert stub.queries == [("aqua._wallet.example.com", "TXT")]
        assert stub.timeout == 1.0
        assert stub.lifetime == 2.0

    def test_picks_proof_record(self):
        stub = _StubResolver(_Answer([
            _Rdata(b"v=spf1 -all"),
            _Rdata(b"wallet=0xabc&timestamp=1&sig=0x12"),
        ]))
        record = TxtResolver(resolver=stub).fetch_proof_record("example.com")
        assert record.startswith("wallet=")

    def test_falls_back_to_first_value(self):
        stub = _StubResolver(_Answer([_Rdata(b"something else")]))
        assert TxtResolver(resolver=stub).fetch_proof_record("example.com") == "something else"

    def test_no_answer(self):
        stub = _StubResolver(_Answer([]))
        with pytest.raises(RecordNotFoundError):
            TxtResolver(resolver=stub).fetch_txt_records("example.com")

    def test_nxdomain(self):
        stub = _StubResolver(error=dns.resolver.NXDOMAIN())
        with pytest.raises(RecordNotFoundError):
            TxtResolver(resolver=stub).fetch_txt_records("example.com")

    def test_timeout(self):
        stub = _StubResolver(error=dns.exception.Timeout())
        with pytest.raises(ResolutionError) as exc:
            TxtResolver(resolver=stub).fetch_txt_records("example.com")
        assert not isinstance(exc.value, RecordNotFoundError)

    def test_other_dns_failure(self):
        stub = _StubResolver(error=dns.resolver.NoNameservers())
        with pytest.raises(ResolutionError):
            TxtResolver(resolver=stub).fetch_txt_records("example.com")
