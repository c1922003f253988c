import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'pwanalyzer-dev-secret-change-in-production'
    # DATABASE_URL (generic) or SQLite fallback in the instance folder
    uri = os.environ.get('DATABASE_URL')
    if uri and uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = uri or \
        'sqlite:///' + os.path.join(os.path.dirname(__file__), 'instance', 'history.db')

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = True

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    BABEL_DEFAULT_LOCALE = 'en'
    BABEL_DEFAULT_TIMEZONE = 'UTC'
    BABEL_TRANSLATION_DIRECTORIES = 'translations'
    LANGUAGES = {
        'en': 'English',
    }

    # 'sql' keeps history across restarts, 'memory' only for the process lifetime
    HISTORY_BACKEND = os.environ.get('HISTORY_BACKEND', 'sql')
    HISTORY_KEY = 'passwordHistory'
    HISTORY_LIMIT = 5
    GENERATOR_DEFAULT_LENGTH = 16

    PASSWORD_MANAGERS = [
        ('LastPass', 'https://www.lastpass.com/'),
        ('1Password', 'https://1password.com/'),
        ('Bitwarden', 'https://bitwarden.com/'),
    ]
    SECURITY_TIPS = [
        'Use a unique password for each account',
        'Change your passwords regularly',
        'Use two-factor authentication when available',
    ]


class TestConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    HISTORY_BACKEND = 'memory'
