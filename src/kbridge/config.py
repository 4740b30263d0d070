""" Client configuration. Settings are layered: built-in defaults, then the
    contents of ``client.json`` in the kbridge configuration directory, then
    environment variables.
"""

import os
import threading

import msgspec


defaults = {
    'endpoint': 'tcp://localhost:4545',
    'check_source': False,
    'linger': 0,
}

environment = {
    'endpoint': 'KBRIDGE_ENDPOINT',
    'check_source': 'KBRIDGE_CHECK_SOURCE',
    'linger': 'KBRIDGE_LINGER',
}

untruths = set(('', '0', 'false', 'f', 'no', 'n', 'off'))

_cache = None
_cache_lock = threading.Lock()


class Settings:
    """ A convenience class to represent kbridge client settings. Unknown
        keys in the configuration file are kept, and available via item
        access, but otherwise ignored.

        :ivar endpoint: ZeroMQ endpoint of the bridge server.
        :ivar check_source: Require every pair in a group to name the same source.
        :ivar linger: ZeroMQ linger period for the client socket, in milliseconds.
    """

    def __init__(self, **kwargs):

        self._settings = dict(defaults)
        self._settings.update(kwargs)


    def __contains__(self, key):
        return key in self._settings


    def __getitem__(self, key):
        return self._settings[key]


    def __repr__(self):
        return 'Settings(' + repr(self._settings) + ')'


    @property
    def check_source(self):
        value = self._settings['check_source']

        if isinstance(value, str):
            return value.strip().lower() not in untruths

        return bool(value)


    @property
    def endpoint(self):
        return str(self._settings['endpoint'])


    @property
    def linger(self):
        return int(self._settings['linger'])


    def load(self, filename):
        """ Update these settings from the JSON file *filename*. The file
            must contain a single JSON object.
        """

        with open(filename, 'rb') as file:
            raw_json = file.read()

        try:
            loaded = msgspec.json.decode(raw_json)
        except msgspec.DecodeError as exc:
            raise ValueError('cannot parse ' + filename + ': ' + str(exc)) from exc

        if not isinstance(loaded, dict):
            raise ValueError(filename + ' must contain a JSON object')

        self._settings.update(loaded)


    def load_environment(self, environ=None):
        """ Update these settings from any KBRIDGE_* environment variables.
        """

        if environ is None:
            environ = os.environ

        for key, variable in environment.items():
            try:
                value = environ[variable]
            except KeyError:
                continue
            else:
                self._settings[key] = value


# end of class Settings



def directory(default=None):
    """ Return the directory location where configuration files are found.
        The location is taken from the ``KBRIDGE_HOME`` environment variable,
        falling back to ``$HOME/.kbridge``. The result is cached; changes to
        the environment after the first call are ignored unless a *default*
        is provided here, which replaces the cached location.
    """

    if default is not None:
        if os.path.isabs(default) == False:
            raise ValueError('the default directory must be an absolute path')

        os.environ['KBRIDGE_HOME'] = default
        directory.found = default

    found = directory.found

    if found is not None:
        return found

    try:
        found = os.environ['KBRIDGE_HOME']
    except KeyError:
        pass
    else:
        directory.found = found
        return found

    try:
        home = os.environ['HOME']
    except KeyError:
        raise RuntimeError('KBRIDGE_HOME and HOME environment variables not set, cannot determine kbridge configuration directory')

    found = os.path.join(home, '.kbridge')

    directory.found = found
    return found

directory.found = None



def get(refresh=False):
    """ Return the :class:`Settings` for this process, loading them on the
        first call or whenever *refresh* is True.
    """

    global _cache

    settings = _cache

    if settings is not None and refresh == False:
        return settings

    with _cache_lock:
        settings = _cache

        if settings is None or refresh:
            settings = load()
            _cache = settings

    return settings



def load():
    """ Build a fresh :class:`Settings` instance from the defaults, the
        configuration file (if any), and the environment.
    """

    settings = Settings()
    filename = os.path.join(directory(), 'client.json')

    if os.path.exists(filename):
        settings.load(filename)

    settings.load_environment()
    return settings


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
