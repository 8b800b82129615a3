"""Shared fixtures for the FlixCloud client tests."""

from unittest.mock import MagicMock

import pytest

from flixcloud import JobRequest, TransportResponse


@pytest.fixture
def transport():
    """A stand-in HttpTransport; set .post.return_value / .side_effect per test."""
    return MagicMock()


@pytest.fixture
def make_job(transport):
    """Build a valid job wired to the mock transport."""

    def _make(**kwargs):
        job = JobRequest(kwargs.pop("api_key", "2j1l:kd3add:0:ivzf:2e1y"), kwargs.pop("recipe_id", 99), transport=transport, **kwargs)
        job.set_input("http://www.example.com/videos/input.mpg")
        job.set_output("ftp://www.example.com/httpdocs/videos/output.flv", "username", "password")
        return job

    return _make


@pytest.fixture
def respond(transport):
    """Make the mock transport answer with a given status and body."""

    def _respond(status_code, body=""):
        transport.post.return_value = TransportResponse(status_code=status_code, body=body)

    return _respond
