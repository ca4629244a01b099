from unittest.mock import Mock

import pytest

from osmrest import Api, Settings


def make_response(content=b'', status_code=200):
    response = Mock()
    response.content = content
    response.status_code = status_code
    response.raise_for_status = Mock()
    return response


class FakeOAuth(object):
    """Records what it's asked to send and answers with a canned body."""

    def __init__(self, reply=b''):
        self.reply = reply
        self.calls = []

    def request(self, method, path, data=None, headers=None):
        self.calls.append((method, path, data, headers))
        return self.reply


@pytest.fixture
def session():
    session = Mock()
    for verb in ('get', 'put', 'delete'):
        getattr(session, verb).return_value = make_response()
    return session


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def api(session, settings):
    return Api('https://osm.test/api', settings=settings, session=session)
