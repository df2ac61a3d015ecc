from unittest.mock import MagicMock

import pytest

from api_client import APIClient, DefaultBodyReader
from helpers import make_response


@pytest.fixture
def transport():
    mock = MagicMock()
    mock.post.return_value = make_response()
    mock.get.return_value = make_response()
    return mock


@pytest.fixture
def body_reader():
    reader = MagicMock(wraps=DefaultBodyReader())
    return reader


@pytest.fixture
def client(transport, body_reader):
    return APIClient(transport=transport, body_reader=body_reader)
