from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


def _registry():
    return current_app.extensions['tictactoe'].registry


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the tic-tac-toe game server!'})


@main.route('/api/rooms')
def list_rooms():
    rooms = []
    for room in _registry().rooms():
        rooms.append({
            'code': room.code,
            'phase': room.phase,
            'players': len(room.players),
            'score': dict(room.score),
        })
    return jsonify(rooms), 200


@main.route('/api/rooms/<string:room_code>')
def get_room(room_code):
    room = _registry().get(room_code)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(room.to_dict()), 200
