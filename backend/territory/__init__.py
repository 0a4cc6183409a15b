from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config, clock=None, scheduler=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Authoritative game state lives on the app, not at module scope
    from territory.broadcast import Broadcaster
    from territory.services.game import GameContext, now_ms
    from territory.services.game.scheduler import Scheduler

    flask_app.extensions['territory'] = GameContext(
        flask_app.config,
        broadcaster=Broadcaster(socketio, namespace=namespace),
        scheduler=scheduler or Scheduler(socketio, logger=flask_app.logger),
        clock=clock or now_ms,
        logger=flask_app.logger,
    )

    # Import and register blueprints here
    from territory.main import main
    flask_app.register_blueprint(main)

    from territory.api.game import game
    flask_app.register_blueprint(game, url_prefix='/api/game')

    # Register Socket.IO event handlers
    from territory.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
