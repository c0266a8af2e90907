"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
import pytest

# Add repo root and src to Python path before any imports
ROOT = os.path.join(os.path.dirname(__file__), '..')
sys.path.insert(0, ROOT)
sys.path.insert(0, os.path.join(ROOT, 'src'))

# Set up test environment variables before importing any modules
os.environ.setdefault('GEMINI_API_KEY', 'test-gemini-key')
os.environ.setdefault('SUPABASE_URL', 'https://test-project.supabase.co')
os.environ.setdefault('SUPABASE_KEY', 'test-anon-key')
os.environ.setdefault('LOG_LEVEL', 'INFO')


def gemini_response(text='Generated text', status_code=200):
    """Build a fake requests.Response for a generateContent call."""
    from unittest.mock import Mock
    r = Mock()
    r.status_code = status_code
    r.reason = 'OK' if status_code < 400 else 'Bad Request'
    r.text = ''
    r.json.return_value = {
        'candidates': [
            {'content': {'parts': [{'text': text}]}}
        ]
    }
    return r


@pytest.fixture
def client():
    """Flask test client for the web app."""
    from webapp import app
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c
