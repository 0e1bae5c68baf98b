""" This is a super-simple rosbridge server to act as a foil for the tests
    that use a real WebSocket. It is used by the run_bridge() fixture
    defined in conftest.py.

    It understands just enough of the protocol to be useful: service calls
    to /unittest/echo are answered with the arguments they carried, and a
    publish is sent back to the client if the client subscribed to that
    topic. A call to /unittest/garble is answered after a publish whose
    topic is not a string. Every frame received is kept in Bridge.received;
    Bridge.departed is set when a client goes away.
"""

import json
import threading

from websockets.sync.server import serve


class Bridge:

    def __init__(self):

        self.received = list()
        self.arrived = threading.Event()
        self.departed = threading.Event()
        self.server = serve(self.handler, '127.0.0.1', 0)

        port = self.server.socket.getsockname()[1]
        self.url = 'ws://127.0.0.1:%d' % (port)


    def handler(self, websocket):

        try:
            self.converse(websocket)
        finally:
            self.departed.set()


    def converse(self, websocket):

        subscribed = set()

        for frame in websocket:
            call = json.loads(frame)
            self.received.append(call)
            self.arrived.set()

            op = call['op']

            if op == 'subscribe':
                subscribed.add(call['topic'])

            elif op == 'publish' and call['topic'] in subscribed:
                reply = dict(op='publish', topic=call['topic'], msg=call['msg'])
                websocket.send(json.dumps(reply))

            elif op == 'call_service' and call['service'] == '/unittest/echo':
                reply = dict(op='service_response', id=call['id'], values=dict(echo=call['args']))
                websocket.send(json.dumps(reply))

            elif op == 'call_service' and call['service'] == '/unittest/garble':
                garbled = dict(op='publish', topic=['/chatter'], msg=dict())
                websocket.send(json.dumps(garbled))
                reply = dict(op='service_response', id=call['id'], values=dict())
                websocket.send(json.dumps(reply))


    def serve_forever(self):
        self.server.serve_forever()


    def shutdown(self):
        self.server.shutdown()


# end of class Bridge


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
