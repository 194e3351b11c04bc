from flask import Blueprint, current_app, jsonify

from quoridor.errors import ResourceError

rooms = Blueprint('rooms', __name__)


@rooms.route('', methods=['GET'])
def list_rooms():
    """
    Returns every open or running room with its head count and status.
    """
    return jsonify(current_app.extensions['rooms'].snapshot()), 200


@rooms.route('/<string:room_code>', methods=['GET'])
def get_room(room_code):
    """
    Returns the lobby view of one room, including its game state once started.
    """
    try:
        lobby = current_app.extensions['rooms'].lobby(room_code)
    except ResourceError as exc:
        return jsonify({'error': str(exc)}), 404
    return jsonify(lobby), 200
