from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(value):
    if not value or value == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ALLOWED_ORIGINS'))
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from tictactoe.broadcast import SocketIOChannel
    from tictactoe.gateway import ConnectionGateway
    from tictactoe.registry import RoomRegistry
    from tictactoe.services.games.scheduler import RoundTransitionScheduler, run_inline

    # Timers run in the caller's thread when configured (tests); background tasks otherwise
    if flask_app.config.get('ROUND_TIMERS_INLINE'):
        scheduler = RoundTransitionScheduler(run_inline, logger=flask_app.logger)
    else:
        scheduler = RoundTransitionScheduler(
            socketio.start_background_task, socketio.sleep, logger=flask_app.logger
        )
    gateway = ConnectionGateway(
        RoomRegistry(),
        SocketIOChannel(socketio, namespace=namespace),
        scheduler,
        logger=flask_app.logger,
        reset_delay=float(flask_app.config['ROUND_RESET_DELAY_SEC']),
    )

    from tictactoe.socketio_events import EXTENSION_KEY, register_socketio_handlers
    flask_app.extensions[EXTENSION_KEY] = gateway

    from tictactoe.routes import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    register_socketio_handlers(namespace=namespace)

    @click.command('serve')
    @click.option('--host', default=None, help='Interface to bind (defaults to HOST).')
    @click.option('--port', default=None, type=int, help='Port to listen on (defaults to PORT).')
    def serve_command(host, port):
        """Runs the Socket.IO game server."""
        host = host or flask_app.config['HOST']
        port = port or flask_app.config['PORT']
        click.echo(f'Server running on http://{host}:{port}')
        socketio.run(flask_app, host=host, port=port, allow_unsafe_werkzeug=True)

    flask_app.cli.add_command(serve_command)

    return flask_app
