'''
Make `import bank` resolve to this checkout even when the pytest console
script runs with a sys.path that excludes the repository root.
'''
import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

@pytest.fixture
def no_prompt():
    def prompter(message, options, default_index):
        raise AssertionError(f'Unexpected prompt: {message}')
    return prompter
