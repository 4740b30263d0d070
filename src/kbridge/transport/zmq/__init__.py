"""ZeroMQ transport backend."""

from .request import Client
