class Broadcaster:
    """Two-path send over the shared Socket.IO server.

    ``socketio.emit`` queues packets per connection and does not wait for
    acknowledgements, so a slow or dead client never stalls the sender.
    """

    def __init__(self, socketio, namespace='/'):
        self.socketio = socketio
        self.namespace = namespace

    def send_to_all(self, event, payload, skip_sid=None):
        self.socketio.emit(event, payload, namespace=self.namespace, skip_sid=skip_sid)

    def send_to(self, sid, event, payload):
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)
