import os


def _split(value):
    return [v.strip() for v in value.split(',') if v.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Membership that triggers the first deal of a room
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    HAND_SIZE = int(os.environ.get('HAND_SIZE', '7'))
    # 'room' notifies only the room's subscribers; 'global' fans out to every client
    NOTIFY_SCOPE = os.environ.get('NOTIFY_SCOPE', 'room')
    CORS_ORIGINS = _split(os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173,http://localhost:8081,http://127.0.0.1:8081',
    ))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
