import pytest
from flask.testing import FlaskClient

from moneymentor.app import create_app
from moneymentor.app.config import TestingConfig


@pytest.fixture()
def app():
    return create_app(TestingConfig)


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
