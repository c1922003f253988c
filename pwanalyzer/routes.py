from flask import (Blueprint, render_template, request, redirect,
                   url_for, session, jsonify, current_app)
from flask_babel import gettext as _
from pwanalyzer.analyzer import analyze_and_record, generate_and_record
from pwanalyzer.password_utils import (
    GeneratorConfig, InvalidConfiguration,
    MIN_GENERATED_LENGTH, MAX_GENERATED_LENGTH
)

main = Blueprint('main', __name__)


def history_store():
    return current_app.extensions['history_store']


def report_json(report) -> dict:
    data = report.to_dict()
    data['feedback']           = [_(m) for m in data['feedback']]
    data['label']              = _(data['label'])
    data['crack_time_display'] = _(data['crack_time_display'])
    return data


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _flag(data: dict, name: str) -> bool:
    value = data.get(name, True)
    if not isinstance(value, bool):
        raise InvalidConfiguration(f'{name} must be true or false.')
    return value


# ── Widget page ───────────────────────────────────────────────────────────────
@main.route('/')
def index():
    return render_template(
        'index.html',
        history=history_store().load_all(),
        default_length=current_app.config.get('GENERATOR_DEFAULT_LENGTH', 16),
        min_length=MIN_GENERATED_LENGTH,
        max_length=MAX_GENERATED_LENGTH,
        managers=current_app.config.get('PASSWORD_MANAGERS', []),
        tips=current_app.config.get('SECURITY_TIPS', []),
    )


# ── Language Switcher ─────────────────────────────────────────────────────────
@main.route('/set_language/<lang>')
def set_language(lang):
    allowed = current_app.config.get('LANGUAGES', {})
    if lang in allowed:
        session['lang'] = lang
    return redirect(request.referrer or url_for('main.index'))


# ── Password Strength API ─────────────────────────────────────────────────────
@main.route('/api/strength', methods=['POST'])
def password_strength():
    data     = _json_body()
    password = data.get('password', '')
    record   = data.get('record', True)
    if not isinstance(password, str):
        return jsonify({'error': _('Password must be a string.')}), 400
    if not isinstance(record, bool):
        return jsonify({'error': _('record must be true or false.')}), 400

    store  = history_store() if record else None
    report = analyze_and_record(password, store)
    return jsonify(report_json(report))


# ── Generate Password API ─────────────────────────────────────────────────────
@main.route('/api/generate', methods=['POST'])
def generate_password_api():
    data = _json_body()
    try:
        config = GeneratorConfig(
            length=data.get('length', current_app.config.get('GENERATOR_DEFAULT_LENGTH', 16)),
            include_upper=_flag(data, 'upper'),
            include_lower=_flag(data, 'lower'),
            include_numbers=_flag(data, 'numbers'),
            include_special=_flag(data, 'special'),
        )
        result = generate_and_record(config, history_store())
    except InvalidConfiguration as e:
        current_app.logger.warning(f"Rejected generator request: {e}")
        return jsonify({'error': _(str(e))}), 400

    return jsonify({'password': result.password, 'strength': report_json(result.analysis)})


# ── History API ───────────────────────────────────────────────────────────────
@main.route('/api/history')
def history():
    return jsonify([r.to_dict() for r in history_store().load_all()])
