from flask import Flask, session, request, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect
from flask_babel import Babel
import os

db = SQLAlchemy()
csrf = CSRFProtect()
babel = Babel()

def get_locale():
    languages = list(current_app.config.get('LANGUAGES', {'en': 'English'}))
    return session.get('lang', request.accept_languages.best_match(languages) or 'en')

def build_history_store(app):
    from .history import HistoryStore, MemoryStorage
    from .models import SQLStorage

    backend = app.config.get('HISTORY_BACKEND', 'sql')
    if backend == 'sql':
        storage = SQLStorage()
    elif backend == 'memory':
        storage = MemoryStorage()
    else:
        raise ValueError(f"Unknown HISTORY_BACKEND: {backend!r}")

    return HistoryStore(storage,
                        key=app.config.get('HISTORY_KEY', 'passwordHistory'),
                        limit=app.config.get('HISTORY_LIMIT', 5))

def create_app(config_object='config.Config'):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)

    # Initialize extensions
    db.init_app(app)
    csrf.init_app(app)
    babel.init_app(app, locale_selector=get_locale)

    app.extensions['history_store'] = build_history_store(app)
    app.logger.info("History backend: %s", app.config.get('HISTORY_BACKEND', 'sql'))

    # Register blueprints
    from .routes import main as main_blueprint
    app.register_blueprint(main_blueprint)

    # Create tables and the database folder (file-backed SQLite only)
    uri = app.config['SQLALCHEMY_DATABASE_URI']
    if uri.startswith('sqlite:///'):
        db_dir = os.path.dirname(uri[len('sqlite:///'):])
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    with app.app_context():
        db.create_all()

    return app
