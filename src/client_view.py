"""
State for the text tool page.

The page has two screens: the one-time email capture and the tool itself.
The only transition is capture -> tool. While a relay call is in flight the
``busy`` flag is set and the operation buttons are disabled.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)

EMAIL_KEY = 'userEmail'
EMPTY_TEXT_ERROR = 'Please enter some text first'
MISSING_EMAIL_ERROR = 'Missing email'

# (operation tag, button label)
OPERATIONS = [
    ('summarize', 'Summarize'),
    ('grammar', 'Fix Grammar'),
    ('rewrite', 'Rewrite'),
    ('enlarge', 'Enlarge'),
]


class Screen(Enum):
    CAPTURE = 'capture'
    TOOL = 'tool'


class ClientView:
    operations = OPERATIONS

    def __init__(self, storage, store_email, relay):
        self.storage = storage
        self.store_email = store_email
        self.relay = relay
        self.screen = Screen.CAPTURE
        self.email = ''
        self.text = ''
        self.result = ''
        self.error = ''
        self.busy = False

    @property
    def buttons_disabled(self):
        return self.busy

    def load(self):
        stored = self.storage.get(EMAIL_KEY)
        if stored:
            self.email = stored
            self.screen = Screen.TOOL
        return self

    def submit_email(self, email):
        """
        Record the email and reveal the tool.

        On failure the store's message is shown and the view stays on the
        capture screen. Nothing is retried.
        """
        self.email = email
        self.error = ''
        if not isinstance(email, str) or not email.strip():
            self.error = MISSING_EMAIL_ERROR
            return False
        try:
            self.store_email(email)
        except Exception as e:
            logger.error(f"Error storing email: {e}", exc_info=True)
            self.error = str(e) or 'Failed to store email'
            return False
        self.storage[EMAIL_KEY] = email
        self.screen = Screen.TOOL
        return True

    def run(self, operation):
        if not self.text.strip():
            self.error = EMPTY_TEXT_ERROR
            return
        if self.busy:
            return
        self.busy = True
        self.error = ''
        try:
            self.result = self.relay(self.text, operation)
        except Exception as e:
            logger.error(f"Error processing text: {e}", exc_info=True)
            self.error = str(e) or 'Failed to process text'
        finally:
            self.busy = False
