from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config
from uno_server.services.uno.registry import RoomRegistry

rooms = RoomRegistry()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or '*'
    rooms.init_app(flask_app)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from uno_server.main import main
    flask_app.register_blueprint(main)

    from uno_server.api.rooms import api
    flask_app.register_blueprint(api, url_prefix='/api/rooms')

    # Importing here ensures the handlers bind to the initialized socketio instance
    from uno_server.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('rooms-reset')
    def rooms_reset_command():
        """Drops every room and its game state."""
        rooms.clear()
        click.echo('All rooms have been dropped.')

    @click.command('rooms-list')
    def rooms_list_command():
        """Prints a one-line summary per room."""
        for summary in rooms.list():
            click.echo(f"{summary['room_id']}  players={summary['player_count']}  {', '.join(summary['players'])}")

    flask_app.cli.add_command(rooms_reset_command)
    flask_app.cli.add_command(rooms_list_command)

    return flask_app
