import os


def _split_origins(raw):
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    DEBUG = os.environ.get('DEBUG', '0').lower() in ('1', 'true', 'yes')
    # Empty list allows every origin (dev)
    CORS_ORIGINS = _split_origins(os.environ.get('CORS_ORIGINS', ''))
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8080'))
    SOCKETIO_PATH = os.environ.get('SOCKETIO_PATH', 'socket.io')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Transport keep-alive (seconds); a missed pong triggers disconnect handling
    SOCKETIO_PING_INTERVAL = int(os.environ.get('SOCKETIO_PING_INTERVAL', '25'))
    SOCKETIO_PING_TIMEOUT = int(os.environ.get('SOCKETIO_PING_TIMEOUT', '20'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
