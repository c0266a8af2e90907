import os
import logging
import requests

logger = logging.getLogger(__name__)

GEMINI_URL = 'https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent'
TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 1024
NO_RESULT = 'No result generated'

# Instruction templates keyed by operation tag
PROMPTS = {
    'summarize': 'Please summarize the following text:',
    'grammar': 'Please correct any grammar mistakes in the following text:',
    'rewrite': 'Please rewrite the following text in a better way while keeping the same meaning:',
    'enlarge': 'Please expand the following text with more details and explanations:',
}


class RelayError(Exception):
    pass


class InvalidOperation(RelayError):
    def __init__(self, message='Invalid operation'):
        super().__init__(message)


# --- simple .env loader (no external deps) ---
def load_env_file(path='.env'):
    try:
        if not os.path.exists(path):
            return
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                s = line.strip()
                if not s or s.startswith('#'):
                    continue
                if '=' not in s:
                    continue
                k, v = s.split('=', 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or not os.environ.get(k)):
                    os.environ[k] = v
    except Exception:
        # ignore .env parse errors to avoid blocking server
        pass


def build_prompt(text, operation):
    instruction = PROMPTS.get(operation) if isinstance(operation, str) else None
    if instruction is None:
        raise InvalidOperation()
    return f"{instruction}\n{text}"


def extract_text(completion):
    candidates = (completion or {}).get('candidates') or [{}]
    content = (candidates[0] or {}).get('content') or {}
    parts = content.get('parts') or [{}]
    return (parts[0] or {}).get('text') or NO_RESULT


def generate_text(prompt):
    """Send one generateContent request to Gemini and return the first candidate's text."""
    api_key = os.getenv('GEMINI_API_KEY', '').strip()
    if not api_key:
        raise RelayError('Missing GEMINI_API_KEY')
    body = {
        'contents': [
            { 'parts': [ { 'text': prompt } ] }
        ],
        'generationConfig': {
            'temperature': TEMPERATURE,
            'maxOutputTokens': MAX_OUTPUT_TOKENS,
        },
    }
    try:
        r = requests.post(GEMINI_URL, json=body, headers={
            'Content-Type': 'application/json',
            'x-goog-api-key': api_key,
        }, timeout=60)
    except requests.RequestException as e:
        logger.error(f"Gemini request failed: {e}")
        raise RelayError(f'API request failed: {e}') from e
    if r.status_code >= 400:
        logger.error(f"Gemini API Error: status={r.status_code} reason={r.reason} body={r.text}")
        raise RelayError(f'API request failed: {r.text or r.reason}')
    try:
        completion = r.json()
    except ValueError as e:
        raise RelayError('Malformed response from generation API') from e
    try:
        return extract_text(completion)
    except (AttributeError, KeyError, IndexError, TypeError) as e:
        raise RelayError('Malformed response from generation API') from e


def process_text(text, operation):
    text = '' if text is None else str(text)
    prompt = build_prompt(text, operation)
    logger.info(f"Relaying {operation} request ({len(text)} chars)")
    return generate_text(prompt)
