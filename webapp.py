import os
import sys
import logging
from flask import Flask, request, jsonify, make_response, redirect, render_template, url_for

# Add src to sys.path to import the shared modules
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))
from text_core import load_env_file, process_text, InvalidOperation, RelayError
from email_store import insert_email, RecordStoreError
from client_view import ClientView, Screen, EMAIL_KEY, EMPTY_TEXT_ERROR, MISSING_EMAIL_ERROR

# Load env from local .env if present
load_env_file()

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'dev')

# Simple CORS for a separately hosted frontend
# You can restrict origins via env: ALLOWED_ORIGINS="https://example.github.io,http://localhost:3000"
ALLOWED_ORIGINS = os.getenv('ALLOWED_ORIGINS', '*')

# Captured email lives in the browser for a year
EMAIL_COOKIE_MAX_AGE = 60 * 60 * 24 * 365

@app.after_request
def add_cors(resp):
    origin = (request.headers.get('Origin') or '').strip()
    allowed = ALLOWED_ORIGINS.strip()
    # Allow specific origins list or wildcard
    if allowed == '*' or not allowed:
        resp.headers['Access-Control-Allow-Origin'] = origin or '*'
    else:
        allowed_set = {o.strip() for o in allowed.split(',') if o.strip()}
        if origin and origin in allowed_set:
            resp.headers['Access-Control-Allow-Origin'] = origin
    req_headers = request.headers.get('Access-Control-Request-Headers', '')
    resp.headers['Access-Control-Allow-Headers'] = req_headers or 'Content-Type'
    resp.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
    resp.headers['Vary'] = 'Origin'
    return resp

def make_view():
    return ClientView(dict(request.cookies), insert_email, process_text).load()

def render_view(view, status=200):
    return render_template('index.html', view=view, Screen=Screen, empty_text_error=EMPTY_TEXT_ERROR), status

# --- Page ---

@app.route('/', methods=['GET'])
def index():
    return render_view(make_view())

@app.route('/email', methods=['POST'])
def capture_email():
    view = make_view()
    email = (request.form.get('email') or '').strip()
    if not view.submit_email(email):
        return render_view(view)
    resp = make_response(redirect(url_for('index')))
    resp.set_cookie(EMAIL_KEY, view.storage[EMAIL_KEY], max_age=EMAIL_COOKIE_MAX_AGE, samesite='Lax')
    return resp

@app.route('/process', methods=['POST'])
def process_form():
    view = make_view()
    if view.screen != Screen.TOOL:
        return redirect(url_for('index'))
    view.text = request.form.get('text') or ''
    view.run((request.form.get('operation') or '').strip())
    return render_view(view)

# --- JSON API ---

@app.route('/api/process-text', methods=['POST', 'OPTIONS'])
def api_process_text():
    if request.method == 'OPTIONS':
        return make_response('', 204)
    try:
        data = request.get_json(force=True) or {}
        if not isinstance(data, dict):
            data = {}
        text = data.get('text')
        operation = data.get('operation')
        return jsonify({'result': process_text(text, operation)})
    except InvalidOperation as e:
        return jsonify({'error': str(e)}), 400
    except RelayError as e:
        logger.error(f"API Error: {e}")
        return jsonify({'error': str(e) or 'Failed to process text'}), 500
    except Exception as e:
        logger.error(f"Unexpected relay error: {e}", exc_info=True)
        return jsonify({'error': str(e) or 'Failed to process text'}), 500

@app.route('/api/email', methods=['POST', 'OPTIONS'])
def api_email():
    if request.method == 'OPTIONS':
        return make_response('', 204)
    try:
        data = request.get_json(force=True) or {}
        if not isinstance(data, dict):
            data = {}
        email = data.get('email')
        email = email.strip() if isinstance(email, str) else ''
        if not email:
            return jsonify({'error': MISSING_EMAIL_ERROR}), 400
        insert_email(email)
        return jsonify({'email': email}), 201
    except RecordStoreError as e:
        return jsonify({'error': str(e) or 'Failed to store email'}), 502
    except Exception as e:
        logger.error(f"Unexpected record store error: {e}", exc_info=True)
        return jsonify({'error': str(e) or 'Failed to store email'}), 500

@app.route('/api/health', methods=['GET'])
def health():
    return jsonify({
        'status': 'healthy',
        'geminiConfigured': bool(os.getenv('GEMINI_API_KEY', '').strip()),
        'recordStoreConfigured': bool(os.getenv('SUPABASE_URL', '').strip() and os.getenv('SUPABASE_KEY', '').strip()),
    })

if __name__ == '__main__':
    port = int(os.getenv('PORT', '8000'))
    app.run(host='0.0.0.0', port=port)
