import os

from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    static_folder = current_app.static_folder
    if static_folder and os.path.isfile(os.path.join(static_folder, 'index.html')):
        return current_app.send_static_file('index.html')
    return jsonify({'message': 'Welcome to the memory game server!'})


@main.route('/api/status')
def status():
    engine = current_app.extensions['memorygame']
    return jsonify({
        'rooms': len(engine.registry),
        'defaultPairCount': engine.default_pair_count,
        'maxPairCount': engine.max_pair_count,
        'revealDelay': engine.reveal_delay,
    })
