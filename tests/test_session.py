import numpy
import pytest

import kbridge
from kbridge.errors import FramingError, UsageError
from kbridge.protocol import printer
from kbridge.transport import TransportError


def test_next(fake_transport, msgpack_pair, array_pair):

    image = numpy.arange(6, dtype=numpy.uint8).reshape(2, 3)
    frames = msgpack_pair('A', {'x': 1}) + array_pair('A', 'image', image)

    transport = fake_transport(frames)
    client = kbridge.Client('tcp://localhost:4545', transport=transport, check_source=False)

    assert transport.endpoint == 'tcp://localhost:4545'
    assert client.state is kbridge.Client.State.IDLE

    reply = client.next()

    assert transport.sent == [b'next']
    assert client.state is kbridge.Client.State.IDLE
    assert list(reply) == ['A']
    assert reply['A']['x'].as_type(int) == 1
    assert (reply['A'].arrays['image'].view() == image).all()


def test_request(fake_transport, msgpack_pair):

    frames = msgpack_pair('A', {'x': 1}) + msgpack_pair('B', {'y': 2})
    transport = fake_transport(frames)
    client = kbridge.Client(transport=transport, check_source=False)

    received = client.request()

    assert received == frames
    assert transport.sent == [b'next']
    assert client.state is kbridge.Client.State.IDLE


def test_request_while_awaiting(fake_transport, msgpack_pair):
    """ A request/reply transport does not allow a second send before the
        reply to the first has been received.
    """

    class BrokenTransport(type(fake_transport())):
        def recv(self):
            raise TransportError('connection lost')

    transport = BrokenTransport([msgpack_pair('A', {}), msgpack_pair('A', {})])
    client = kbridge.Client(transport=transport, check_source=False)

    with pytest.raises(TransportError):
        client.request()

    assert client.state is kbridge.Client.State.AWAITING_REPLY

    with pytest.raises(UsageError):
        client.request()

    with pytest.raises(UsageError):
        client.next()

    assert len(transport.sent) == 1

    # A fresh connection starts a fresh exchange.
    client.connect('tcp://elsewhere:4545')
    assert client.state is kbridge.Client.State.IDLE


def test_iteration(fake_transport, msgpack_pair):

    transport = fake_transport(msgpack_pair('A', {'n': 1}), msgpack_pair('A', {'n': 2}))
    client = kbridge.Client(transport=transport, check_source=False)

    numbers = list()
    for count, reply in zip(range(2), client):
        numbers.append(reply['A']['n'].as_type(int))

    assert numbers == [1, 2]
    assert transport.sent == [b'next', b'next']


def test_show_message(fake_transport, msgpack_pair):

    frames = msgpack_pair('A', {'x': 1})
    client = kbridge.Client(transport=fake_transport(frames), check_source=False)

    text = client.show_message()

    assert text.count(printer.separator) == 2
    assert text == printer.format_frames(frames)


def test_show_next(fake_transport, msgpack_pair):

    client = kbridge.Client(transport=fake_transport(msgpack_pair('A', {'x': 1})), check_source=False)

    text = client.show_next()

    assert text.startswith('source: A\n')
    assert 'x, uint' in text


def test_check_source(fake_transport, msgpack_pair, array_pair):

    data = numpy.zeros(2, dtype=numpy.uint8)
    frames = msgpack_pair('A', {}) + array_pair('B', 'data', data)

    client = kbridge.Client(transport=fake_transport(frames), check_source=True)

    with pytest.raises(FramingError):
        client.next()

    # A decode failure does not leave the session stuck.
    assert client.state is kbridge.Client.State.IDLE


def test_check_source_from_config(fake_transport, monkeypatch):

    monkeypatch.setenv('KBRIDGE_CHECK_SOURCE', 'yes')

    client = kbridge.Client(transport=fake_transport())
    assert client.check_source == True


def test_context_manager(fake_transport):

    transport = fake_transport()

    with kbridge.Client('tcp://localhost:4545', transport=transport, check_source=False) as client:
        assert transport.is_open

    assert transport.closed
    assert not transport.is_open


def test_connect(fake_transport, monkeypatch):

    monkeypatch.setenv('KBRIDGE_ENDPOINT', 'tcp://bridge.example:1234')

    transport = fake_transport()
    client = kbridge.connect(transport=transport, check_source=False)

    assert isinstance(client, kbridge.Client)
    assert transport.endpoint == 'tcp://bridge.example:1234'

    transport = fake_transport()
    kbridge.connect('ipc:///tmp/bridge', transport=transport)
    assert transport.endpoint == 'ipc:///tmp/bridge'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
