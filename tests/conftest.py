"""
Shared fixtures: in-memory DNS clients returning real dnspython messages
"""

import threading

import dns.message
import dns.name
import dns.rdataclass
import dns.rdatatype
import dns.rrset
import pytest

from bulkptr.models import Nameserver
from bulkptr.resolver.client import DNSClient


def make_response(name, *records):
    """
    Build a response to a PTR query for ``name``.

    Args:
        name: Query name
        records: (owner, rdtype, rdata text) tuples for the answer section
    """
    query = dns.message.make_query(name, dns.rdatatype.PTR)
    response = dns.message.make_response(query)
    for owner, rdtype, text in records:
        response.answer.append(dns.rrset.from_text(owner, 300, 'IN', rdtype, text))
    return response


def make_empty_rrset_response(name):
    """Response whose first answer RRset carries no data"""
    response = make_response(name)
    response.answer.append(
        dns.rrset.RRset(dns.name.from_text(name), dns.rdataclass.IN, dns.rdatatype.PTR)
    )
    return response


class FakeClient(DNSClient):
    """
    DNS client answering from a dict.

    ``answers`` maps query name to a response message or to an exception
    instance to raise. Unknown names get an empty response.
    """

    def __init__(self, nameserver, answers, log=None):
        super().__init__(nameserver, timeout=1.0)
        self.answers = answers
        self.log = log if log is not None else []
        self.closed = False

    def query(self, name, rdclass=dns.rdataclass.IN, rdtype=dns.rdatatype.PTR):
        name = str(name)
        self.log.append((self.nameserver, name))
        answer = self.answers.get(name)
        if answer is None:
            return make_response(name)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def close(self):
        self.closed = True


class FakeClientFactory:
    """Client factory recording every client and query it sees"""

    def __init__(self, answers=None):
        self.answers = answers if answers is not None else {}
        self.clients = []
        self.queries = []
        self._lock = threading.Lock()

    def __call__(self, nameserver):
        client = FakeClient(nameserver, self.answers, self.queries)
        with self._lock:
            self.clients.append(client)
        return client


@pytest.fixture
def nameserver():
    return Nameserver('192.0.2.53', 53)


@pytest.fixture
def factory():
    return FakeClientFactory()
