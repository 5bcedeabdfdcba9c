import pytest

from bulkptr.config import DEFAULT_NAMESERVERS, parse_endpoint, parse_endpoints
from bulkptr.errors import ConfigurationError
from bulkptr.models import Nameserver


@pytest.mark.parametrize('text, expected', [
    ('1.1.1.1:53', Nameserver('1.1.1.1', 53)),
    ('8.8.8.8', Nameserver('8.8.8.8', 53)),
    (' 9.9.9.9:5353 ', Nameserver('9.9.9.9', 5353)),
    ('2606:4700:4700::1111', Nameserver('2606:4700:4700::1111', 53)),
    ('[2001:4860:4860::8888]:853', Nameserver('2001:4860:4860::8888', 853)),
    ('[2001:db8::1]', Nameserver('2001:db8::1', 53)),
])
def test_parse_endpoint(text, expected):
    assert parse_endpoint(text) == expected


@pytest.mark.parametrize('text', [
    '',
    'dns.google',
    '1.1.1.1:dns',
    '1.1.1.1:0',
    '1.1.1.1:70000',
    '[2001:db8::1',
    '[2001:db8::1]53',
    '300.1.1.1',
])
def test_parse_endpoint_rejects(text):
    with pytest.raises(ConfigurationError):
        parse_endpoint(text)


def test_nameserver_text_form():
    assert str(Nameserver('1.1.1.1')) == '1.1.1.1:53'
    assert str(Nameserver('2001:db8::1', 5353)) == '[2001:db8::1]:5353'


def test_parse_endpoints_splits_commas():
    endpoints = parse_endpoints(['1.1.1.1,8.8.8.8:53', '9.9.9.9'])

    assert [str(e) for e in endpoints] == ['1.1.1.1:53', '8.8.8.8:53', '9.9.9.9:53']


def test_parse_endpoints_requires_one():
    with pytest.raises(ConfigurationError):
        parse_endpoints([' , '])


def test_defaults_parse():
    assert len(parse_endpoints(DEFAULT_NAMESERVERS)) == 4
