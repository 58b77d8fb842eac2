import pytest

from app import create_app


@pytest.fixture
def app():
    return create_app({"TESTING": True, "SYSTEM_PROMPTPAY_ID": "0812345678"})


@pytest.fixture
def client(app):
    return app.test_client()
