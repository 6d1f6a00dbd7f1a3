import pytest

from captchas.factory import create_web_app
from captchas.services.store import current_store

IDENTIFIER = 'LBm5vMjHDtdUfaWYXiQX'


@pytest.fixture()
def app():
    app = create_web_app()
    app.config['REDIS_FAKE'] = True
    app.config['CAPTCHA_KEY_PREFIX'] = 'captcha:'
    with app.app_context():
        store = current_store()
    store.r.flushall()
    store.r.set(f'captcha:{IDENTIFIER}', '348291', ex=300)
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
