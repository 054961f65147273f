from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

# Per-session locks are OS locks, so handlers run on real threads
socketio = SocketIO(async_mode='threading')


def create_app(config_class=Config, store=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    # Empty allow-list means any origin may connect
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or '*'
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(
        flask_app,
        cors_allowed_origins=allowed_origins,
        path=flask_app.config.get('SOCKETIO_PATH', 'socket.io'),
        ping_interval=flask_app.config.get('SOCKETIO_PING_INTERVAL', 25),
        ping_timeout=flask_app.config.get('SOCKETIO_PING_TIMEOUT', 20),
    )

    from scoreroom.main import main
    flask_app.register_blueprint(main)

    # Each app owns its own store; handlers bind to the freshly initialized server
    from scoreroom.socketio_events import SessionProtocolHandler
    from scoreroom.store import SessionStore
    if store is None:
        store = SessionStore()
    protocol = SessionProtocolHandler(
        socketio, store, namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    )
    protocol.register()
    flask_app.extensions['session_store'] = store
    flask_app.extensions['session_protocol'] = protocol

    flask_app.logger.info(
        f"[startup] namespace={protocol.namespace} origins={allowed_origins} path={flask_app.config.get('SOCKETIO_PATH')}"
    )
    return flask_app
