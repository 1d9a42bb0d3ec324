"""Shared fixtures for the difficulty estimation client tests."""

import pytest

from difficulty_estimation_client.config import ClientConfig


class FakeTransport:
    """Records every outbound payload and replies with a canned response or error."""

    def __init__(self, response=None, error=None, on_call=None):
        self.response = response
        self.error = error
        self.on_call = on_call
        self.calls = []

    def __call__(self, payload):
        self.calls.append(dict(payload))
        if self.on_call is not None:
            self.on_call(payload)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def config():
    return ClientConfig(base_url="https://api.example.com/")


@pytest.fixture
def marathon_response():
    return {
        "experience": "마라톤 완주",
        "level": "5",
        "total_difficulty": 72.5,
        "similarity": 0,
        "difficulty_scores": [80, 60, 50, 40, 30, 20, 90, 70, 60, 10],
    }


@pytest.fixture
def numeric_level_response():
    return {
        "id": 17,
        "experience": "에베레스트 등반",
        "level": 3,
        "total_difficulty": 91.25,
        "similarity": 0.8734,
        "difficulty_scores": [95.5, 88, 90, 60, 40, 85, 99, 92, 30, 97],
    }


@pytest.fixture
def fake_transport():
    def _make(response=None, error=None, on_call=None):
        return FakeTransport(response=response, error=error, on_call=on_call)

    return _make
