from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # In-memory registries live for the lifetime of the process
    from quoridor.services.rooms import IdentityRegistry, RoomDirectory
    flask_app.extensions['rooms'] = RoomDirectory(
        max_players=flask_app.config.get('MAX_ROOM_PLAYERS', 4),
        min_players=flask_app.config.get('MIN_PLAYERS', 2),
    )
    flask_app.extensions['identities'] = IdentityRegistry()

    # Import and register blueprints here
    from quoridor.main import main
    flask_app.register_blueprint(main)

    from quoridor.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    # Importing here ensures the handlers bind to the initialized socketio instance
    from quoridor.socketio_events import register_socketio_handlers
    register_socketio_handlers(socketio, namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    flask_app.logger.info(
        f"[startup] port={flask_app.config.get('PORT')} namespace={flask_app.config.get('SOCKETIO_NAMESPACE', '/')}"
    )
    return flask_app
