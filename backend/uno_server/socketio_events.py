from flask_socketio import join_room, leave_room, emit
from flask import current_app
from uno_server import socketio
from uno_server.notifications import NAMESPACE, room_channel


def handle_connect():
    emit('connected', {'message': f'Connected to {NAMESPACE}'})


def handle_disconnect():
    # Subscriptions die with the socket; clients re-subscribe and poll after reconnecting
    current_app.logger.debug('[ws] client disconnected')


def _room_id(data):
    data = data or {}
    return data.get('room_id') or data.get('roomId')


def handle_join_room(data):
    room_id = _room_id(data)
    if not room_id:
        emit('error', {'message': 'room_id is required'})
        return
    room = room_channel(room_id)
    join_room(room)
    emit('joined', {'room': room, 'room_id': room_id})


def handle_leave_room(data):
    room_id = _room_id(data)
    if not room_id:
        emit('error', {'message': 'room_id is required'})
        return
    room = room_channel(room_id)
    leave_room(room)
    emit('left', {'room': room, 'room_id': room_id})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = [NAMESPACE, '/'] if testing else [NAMESPACE]
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
        socketio.on_event('join_room', handle_join_room, namespace=namespace)
        socketio.on_event('leave_room', handle_leave_room, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
