import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Pause between a finished round and the fresh board (seconds)
    ROUND_RESET_DELAY_SEC = float(os.environ.get('ROUND_RESET_DELAY_SEC', '2.5'))
    # Socket.IO namespace the game protocol is served on
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Comma-separated list, or '*' for any origin
    CORS_ALLOWED_ORIGINS = os.environ.get('CORS_ALLOWED_ORIGINS', '*')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '5000'))
    # Run round timers synchronously instead of as background tasks
    ROUND_TIMERS_INLINE = False
