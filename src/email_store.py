import os
import logging
import requests

logger = logging.getLogger(__name__)

DEFAULT_TABLE = 'emailg'


class RecordStoreError(Exception):
    pass


def error_message(r):
    """Pull the human readable message out of a failed Supabase response."""
    try:
        data = r.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        msg = data.get('message') or data.get('error_description') or data.get('error')
        if msg:
            return str(msg)
    return r.text or r.reason or 'Failed to store email'


def insert_email(email):
    base = os.getenv('SUPABASE_URL', '').strip().rstrip('/')
    key = os.getenv('SUPABASE_KEY', '').strip()
    if not base or not key:
        raise RecordStoreError('Missing SUPABASE_URL/SUPABASE_KEY')
    table = os.getenv('SUPABASE_EMAIL_TABLE', '').strip() or DEFAULT_TABLE
    try:
        r = requests.post(f'{base}/rest/v1/{table}', json=[{ 'email': email }], headers={
            'apikey': key,
            'Authorization': f'Bearer {key}',
            'Content-Type': 'application/json',
            'Prefer': 'return=minimal',
        }, timeout=30)
    except requests.RequestException as e:
        logger.error(f"Record store request failed: {e}")
        raise RecordStoreError(str(e)) from e
    if r.status_code >= 400:
        msg = error_message(r)
        logger.error(f"Record store HTTP {r.status_code}: {msg}")
        raise RecordStoreError(msg)
    logger.info(f"Stored email in {table}")
