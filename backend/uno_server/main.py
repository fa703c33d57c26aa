from flask import Blueprint, jsonify
from uno_server import rooms

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the UNO room server!', 'rooms': len(rooms)})
