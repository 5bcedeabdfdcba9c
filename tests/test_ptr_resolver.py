import ipaddress

from bulkptr.errors import TransportError
from bulkptr.models import ErrorKind, OutcomeStatus
from bulkptr.resolver.cancel import CancelToken
from bulkptr.resolver.ptr_resolver import get_ptr, resolve

from .conftest import FakeClient, make_empty_rrset_response, make_response


NAME = '8.8.8.8.in-addr.arpa.'


def test_ptr_answer_is_lower_cased(nameserver):
    client = FakeClient(nameserver, {
        NAME: make_response(NAME, (NAME, 'PTR', 'DNS.Google.')),
    })

    outcome = resolve(NAME, client)

    assert outcome.hostname == 'dns.google.'
    assert outcome.error is None
    assert outcome.query == NAME
    assert outcome.status is OutcomeStatus.RESOLVED


def test_only_first_answer_is_used(nameserver):
    client = FakeClient(nameserver, {
        NAME: make_response(
            NAME,
            (NAME, 'PTR', 'first.example.'),
            ('other.in-addr.arpa.', 'PTR', 'second.example.'),
        ),
    })

    assert resolve(NAME, client).hostname == 'first.example.'


def test_cname_chain_is_followed(nameserver):
    name = '75.7.246.87.in-addr.arpa.'
    middle = '75.0-255.7.246.87.in-addr.arpa.'
    client = FakeClient(nameserver, {
        name: make_response(name, (name, 'CNAME', middle.upper())),
        middle: make_response(middle, (middle, 'PTR', 'bulbank.linkbg.com.')),
    })

    outcome = resolve(name, client)

    assert outcome.hostname == 'bulbank.linkbg.com.'
    assert outcome.query == name
    assert outcome.cname_chain == (middle,)
    assert [q for _, q in client.log] == [name, middle]


def test_multi_hop_cname_chain(nameserver):
    hops = ['a.example.', 'b.example.', 'c.example.']
    answers = {NAME: make_response(NAME, (NAME, 'CNAME', hops[0]))}
    for current, following in zip(hops, hops[1:]):
        answers[current] = make_response(current, (current, 'CNAME', following))
    answers[hops[-1]] = make_response(hops[-1], (hops[-1], 'PTR', 'end.example.'))
    client = FakeClient(nameserver, answers)

    outcome = resolve(NAME, client)

    assert outcome.hostname == 'end.example.'
    assert outcome.cname_chain == tuple(hops)


def test_cname_loop_stops_at_hop_limit(nameserver):
    loop = 'loop.example.'
    client = FakeClient(nameserver, {
        NAME: make_response(NAME, (NAME, 'CNAME', loop)),
        loop: make_response(loop, (loop, 'CNAME', loop)),
    })

    outcome = resolve(NAME, client, max_hops=5)

    assert outcome.error_kind is ErrorKind.CHAIN_TOO_LONG
    assert outcome.hostname is None
    assert len(client.log) == 6
    assert len(outcome.cname_chain) == 5


def test_empty_answer_is_not_an_error(nameserver):
    client = FakeClient(nameserver, {})

    outcome = resolve('1.2.0.192.in-addr.arpa.', client)

    assert outcome.hostname is None
    assert outcome.error is None
    assert outcome.status is OutcomeStatus.NO_ANSWER


def test_transport_error_becomes_outcome(nameserver):
    client = FakeClient(nameserver, {NAME: TransportError('timed out', nameserver)})

    outcome = resolve(NAME, client)

    assert outcome.status is OutcomeStatus.ERROR
    assert outcome.error_kind is ErrorKind.TRANSPORT
    assert 'timed out' in outcome.error


def test_unexpected_record_type(nameserver):
    client = FakeClient(nameserver, {
        NAME: make_response(NAME, (NAME, 'A', '192.0.2.1')),
    })

    outcome = resolve(NAME, client)

    assert outcome.error_kind is ErrorKind.PROTOCOL
    assert 'A 192.0.2.1' in outcome.error


def test_empty_rrset_is_protocol_error(nameserver):
    client = FakeClient(nameserver, {NAME: make_empty_rrset_response(NAME)})

    outcome = resolve(NAME, client)

    assert outcome.error_kind is ErrorKind.PROTOCOL


def test_cancelled_token_skips_query(nameserver):
    client = FakeClient(nameserver, {})
    token = CancelToken()
    token.cancel()

    outcome = resolve(NAME, client, cancel=token)

    assert outcome.error_kind is ErrorKind.CANCELLED
    assert client.log == []


def test_get_ptr_sets_address(nameserver):
    client = FakeClient(nameserver, {
        NAME: make_response(NAME, (NAME, 'PTR', 'dns.google.')),
    })

    outcome = get_ptr('8.8.8.8', client)

    assert outcome.address == ipaddress.ip_address('8.8.8.8')
    assert outcome.query == NAME
    assert outcome.hostname == 'dns.google.'
