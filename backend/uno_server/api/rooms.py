from flask import Blueprint, jsonify, request, current_app
from uno_server import rooms
from uno_server.errors import GameError, InitializationFailure
from uno_server.notifications import notify_room_changed
from uno_server.services.uno import parse_action


api = Blueprint('rooms', __name__)


@api.errorhandler(GameError)
def handle_game_error(exc: GameError):
    return jsonify(exc.to_dict()), exc.status_code


def _join(room_id):
    data = request.get_json(silent=True) or {}
    if room_id is None:
        room_id = data.get('room_id', data.get('roomId'))
    if room_id in (None, '', 'null'):
        room_id = None
    player_id = data.get('player_id', data.get('playerId'))
    name = data.get('name')
    if not all([player_id, name]):
        return jsonify({'error': 'Player ID and name are required', 'code': 'invalid_request'}), 400

    try:
        session, added = rooms.create_or_join(room_id, str(player_id), str(name))
    except InitializationFailure as exc:
        current_app.logger.error(f"[join] room={exc.room_id} could not start: {exc.message}")
        notify_room_changed(exc.room_id)
        raise

    # Re-joins still notify so a reconnecting client triggers a refresh
    notify_room_changed(session.room_id)
    return jsonify({'player_id': player_id, 'room_id': session.room_id, 'joined': added})


@api.route('/join', methods=['POST'])
def join_room():
    return _join(None)


@api.route('/<string:room_id>/join', methods=['POST'])
def join_named_room(room_id):
    return _join(room_id)


@api.route('', methods=['GET'])
def list_rooms():
    return jsonify(rooms.list())


@api.route('/<string:room_id>/state/<string:player_id>', methods=['GET'])
def get_state(room_id, player_id):
    session = rooms.get(room_id)
    return jsonify(session.snapshot(player_id))


@api.route('/<string:room_id>/action', methods=['POST'])
def submit_action(room_id):
    data = request.get_json(silent=True) or {}
    player_id = data.get('player_id', data.get('playerId'))
    if not player_id:
        return jsonify({'error': 'Player ID is required', 'code': 'invalid_request'}), 400

    session = rooms.get(room_id)
    action = parse_action(data.get('action'))
    try:
        session.apply_action(str(player_id), action)
    except GameError as exc:
        current_app.logger.info(f"[action-rejected] room={room_id} player={player_id} code={exc.code}")
        raise

    notify_room_changed(room_id)
    return jsonify({'success': True})


@api.route('/<string:room_id>/reset', methods=['POST'])
def reset_room(room_id):
    session = rooms.reset(room_id)
    notify_room_changed(room_id)
    return jsonify({'success': True, 'status': session.status})
