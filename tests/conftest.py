from datetime import datetime, timedelta

import pytest

SAMPLE_BATCH = """userId,timestamp,body
102,2017-01-30 08:12:44,Hello my loan was rejected
215,2017-01-30 08:40:03,"I have been waiting for disbursement, please help"
102,2017-01-30 09:05:19,Please check my balance
not a record
378,2017-01-30 09:18:51,Thank you
"""


class FakeClock:
    """Returns a fixed start time, one second later on every call."""

    def __init__(self, start=datetime(2017, 1, 31, 9, 0, 0)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def sample_batch():
    return SAMPLE_BATCH


@pytest.fixture
def clock():
    return FakeClock()
