import os

import click
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__, static_folder=config_class.PUBLIC_DIR, static_url_path='')
    flask_app.config.from_object(config_class)

    origins = flask_app.config.get('CORS_ORIGINS') or '*'
    if origins == ['*']:
        origins = '*'
    CORS(flask_app, origins=origins)
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # Game services live on the app so every app instance has its own rooms
    from memorygame.services.games import MatchEngine, RoomRegistry, standard_pool
    from memorygame.services.games.gateway import SocketIOGateway
    from memorygame.services.games.scheduler import RoomTaskScheduler

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['memorygame'] = MatchEngine(
        registry=RoomRegistry(),
        gateway=SocketIOGateway(socketio, namespace=namespace),
        scheduler=RoomTaskScheduler(flask_app, socketio),
        image_pool=standard_pool(
            flask_app.config['STANDARD_IMAGE_COUNT'],
            flask_app.config['STANDARD_IMAGE_PATTERN'],
        ),
        reveal_delay=flask_app.config['REVEAL_DELAY_SEC'],
        default_pair_count=flask_app.config['DEFAULT_PAIR_COUNT'],
        disconnect_policy=flask_app.config['DISCONNECT_POLICY'],
        draw_result=flask_app.config['DRAW_RESULT'],
        logger=flask_app.logger,
    )

    from memorygame.main import main
    flask_app.register_blueprint(main)

    from memorygame.api.uploads import uploads
    flask_app.register_blueprint(uploads)

    from memorygame.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    @click.command('pool-check')
    def pool_check_command():
        """Reports standard pool images missing from the static folder."""
        engine = flask_app.extensions['memorygame']
        missing = [
            ref for ref in engine.image_pool
            if not os.path.isfile(os.path.join(flask_app.static_folder, ref.lstrip('/')))
        ]
        for ref in missing:
            click.echo(f'missing: {ref}')
        click.echo(f'{len(engine.image_pool) - len(missing)}/{len(engine.image_pool)} standard images present')
        if missing:
            raise SystemExit(1)

    flask_app.cli.add_command(pool_check_command)

    return flask_app
