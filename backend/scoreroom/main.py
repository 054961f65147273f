from flask import Blueprint, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    # Liveness probe for load balancers and curl
    return jsonify({'status': 'ok'})
