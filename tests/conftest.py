import sys, os

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tests.helpers import RecordingAdapter, fill_row


@pytest.fixture
def adapter():
    return RecordingAdapter()


__all__ = ["RecordingAdapter", "fill_row"]
