import pytest

import kbridge
from kbridge.protocol import codec
from kbridge.transport.base import Transport


class FakeTransport(Transport):
    """ In-memory stand-in for a REQ socket. Each call to send() queues up
        the next canned reply; recv() hands its frames back one at a time.
    """

    def __init__(self, replies=()):
        self.replies = list(replies)
        self.sent = list()
        self.endpoint = None
        self.closed = False
        self._pending = list()
        self._more = False

    def connect(self, endpoint):
        self.endpoint = endpoint
        self.closed = False

    def close(self):
        self.closed = True

    def send(self, data):
        self.sent.append(bytes(data))
        self._pending = list(self.replies.pop(0))

    def recv(self):
        frame = self._pending.pop(0)
        self._more = len(self._pending) > 0
        return frame

    @property
    def more(self):
        return self._more

    @property
    def is_open(self):
        return self.endpoint is not None and not self.closed


@pytest.fixture(autouse=True)
def kbridge_home(tmp_path, monkeypatch):
    """ Point the configuration directory at an empty temporary location,
        and discard any cached settings, so no test sees the user's files.
    """

    monkeypatch.setenv('KBRIDGE_HOME', str(tmp_path))
    for variable in kbridge.config.environment.values():
        monkeypatch.delenv(variable, raising=False)

    monkeypatch.setattr(kbridge.config.directory, 'found', None)
    monkeypatch.setattr(kbridge.config, '_cache', None)

    yield tmp_path


@pytest.fixture
def fake_transport():

    def make(*replies):
        return FakeTransport(replies)

    return make


@pytest.fixture
def msgpack_pair():
    """ Build the (header, payload) frames for an inline msgpack payload.
    """

    def make(source, data, **header):
        fields = dict(content='msgpack', source=source)
        fields.update(header)
        return [codec.encode(fields), codec.encode(data)]

    return make


@pytest.fixture
def array_pair():
    """ Build the (header, payload) frames for a numpy array payload.
    """

    def make(source, path, array, content='array', **header):
        fields = dict(content=content, source=source, path=path)
        fields['shape'] = list(array.shape)
        fields['dtype'] = str(array.dtype)
        fields.update(header)
        return [codec.encode(fields), array.tobytes()]

    return make


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
