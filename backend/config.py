import os

basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    SOCKETIO_NAMESPACE = '/'
    # Static root: standard images under /images, uploads under /uploads
    PUBLIC_DIR = os.environ.get('PUBLIC_DIR') or os.path.join(basedir, 'public')
    UPLOAD_SUBDIR = 'uploads'
    MAX_UPLOAD_FILES = int(os.environ.get('MAX_UPLOAD_FILES', '20'))
    ALLOWED_IMAGE_MIMETYPES = ('image/jpeg', 'image/png', 'image/gif')
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', str(16 * 1024 * 1024)))
    # Standard image pool (1-based file numbering)
    STANDARD_IMAGE_COUNT = int(os.environ.get('STANDARD_IMAGE_COUNT', '45'))
    STANDARD_IMAGE_PATTERN = os.environ.get('STANDARD_IMAGE_PATTERN', '/images/bild{}.jpg')
    DEFAULT_PAIR_COUNT = int(os.environ.get('DEFAULT_PAIR_COUNT', '8'))
    # Seconds a mismatched pair stays face-up before it is hidden again
    REVEAL_DELAY_SEC = float(os.environ.get('REVEAL_DELAY_SEC', '2'))
    # 'end' removes the room when a player disconnects, 'continue' lets the other player finish
    DISCONNECT_POLICY = os.environ.get('DISCONNECT_POLICY', 'end')
    DRAW_RESULT = os.environ.get('DRAW_RESULT', 'draw')
