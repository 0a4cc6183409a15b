import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated list of browser origins allowed to connect
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'
    ).split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Board and claim rules
    GRID_SIZE = int(os.environ.get('GRID_SIZE', '50'))
    CELL_COOLDOWN_MS = int(os.environ.get('CELL_COOLDOWN_MS', '5000'))
    VICTORY_THRESHOLD = int(os.environ.get('VICTORY_THRESHOLD', '1000'))
    # Round timers (milliseconds)
    ROUND_DURATION_MS = int(os.environ.get('ROUND_DURATION_MS', str(10 * 60 * 1000)))
    ROUND_TICK_INTERVAL_MS = int(os.environ.get('ROUND_TICK_INTERVAL_MS', '5000'))
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '10'))
    # Listen address for run.py
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
