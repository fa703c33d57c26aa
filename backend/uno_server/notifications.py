from flask import current_app

from uno_server import socketio

NAMESPACE = '/ws'
EVENT = 'state_update'


def room_channel(room_id: str) -> str:
    return f"room:{room_id}"


def notify_room_changed(room_id: str) -> None:
    """Tell subscribers to re-fetch state. Best effort: failures are logged only.

    The payload only names the room; clients pull the new state themselves.
    NOTIFY_SCOPE='global' broadcasts to every connected client instead of
    the room's subscribers.
    """
    scope = current_app.config.get('NOTIFY_SCOPE', 'room')
    try:
        if scope == 'global':
            socketio.emit(EVENT, {'room_id': room_id}, namespace=NAMESPACE)
        else:
            socketio.emit(EVENT, {'room_id': room_id}, to=room_channel(room_id), namespace=NAMESPACE)
    except Exception as exc:
        current_app.logger.warning(f"[notify] room={room_id} emit failed: {exc}")
