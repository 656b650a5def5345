# provenance/config/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _database_uri(base_dir):
    if os.getenv('DATABASE_URL'):
        return os.getenv('DATABASE_URL')
    if os.getenv('MYSQL_HOST'):
        user = os.getenv('MYSQL_USER', 'root')
        password = os.getenv('MYSQL_PASSWORD', '')
        host = os.getenv('MYSQL_HOST')
        port = os.getenv('MYSQL_PORT', '3306')
        database = os.getenv('MYSQL_DATABASE', 'provenance_db')
        return f"mysql+pymysql://{user}:{password}@{host}:{port}/{database}"
    return f"sqlite:///{os.path.join(base_dir, '../../provenance.db')}"


class Config:
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    LOGS_PATH = os.getenv('LOGS_PATH', os.path.join(BASE_DIR, '../../logs'))

    # DATABASE_URL wins, then MYSQL_* from .env, then a local SQLite file
    SQLALCHEMY_DATABASE_URI = _database_uri(BASE_DIR)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SECRET_KEY = os.getenv('SECRET_KEY', 'your-secret-key')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'your-jwt-secret-key')
    DEBUG = os.getenv('FLASK_DEBUG', 'False') == 'True'
    PORT = int(os.getenv('PORT', 5000))
    # Let flask-restful hand APIError subclasses to the app error handler
    PROPAGATE_EXCEPTIONS = True

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://localhost:5000').split(',')

    # Lighthouse pinning service; no key means the local content store is used
    LIGHTHOUSE_API_KEY = os.getenv('LIGHTHOUSE_API_KEY')
    LIGHTHOUSE_API_URL = os.getenv('LIGHTHOUSE_API_URL', 'https://api.lighthouse.storage')
    LIGHTHOUSE_NODE_URL = os.getenv('LIGHTHOUSE_NODE_URL', 'https://node.lighthouse.storage')
    LIGHTHOUSE_TIMEOUT = int(os.getenv('LIGHTHOUSE_TIMEOUT', 60))

    NONCE_TTL_SECONDS = int(os.getenv('NONCE_TTL_SECONDS', 10 * 60))

    UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(BASE_DIR, '../../uploads'))
    MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", 500 * 1024 * 1024))  # 500MB
