import pytest
import threading

import roswire
import unitbridge

from scripted import ScriptedTransport


@pytest.fixture
def idle_ros():
    """ A connection whose socket has been created but not opened.
    """

    ros = roswire.Ros('ws://unittest:9090', transport=ScriptedTransport)
    return ros


@pytest.fixture
def ros(idle_ros):
    """ A connection whose socket is open.
    """

    idle_ros.socket.accept()
    return idle_ros


@pytest.fixture
def socket(ros):
    return ros.socket


@pytest.fixture
def run_bridge():
    """ A minimal rosbridge server on a local port; see unitbridge.py. The
        fixture yields the running Bridge; its url attribute is where to connect.
    """

    bridge = unitbridge.Bridge()
    thread = threading.Thread(target=bridge.serve_forever, daemon=True)
    thread.start()

    yield bridge

    bridge.shutdown()
    thread.join(5)


class Recorder:
    """ Callable that remembers every call made to it, and lets a test wait
        for the next one.
    """

    def __init__(self):
        self.calls = list()
        self.event = threading.Event()

    def __call__(self, *args):
        self.calls.append(args)
        self.event.set()

    @property
    def count(self):
        return len(self.calls)

    def wait(self, timeout=2):
        return self.event.wait(timeout)


@pytest.fixture
def recorder():
    return Recorder


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
