"""Application factory for the captcha image service."""

from flask import Flask, make_response, Response
from werkzeug.exceptions import HTTPException, NotFound, InternalServerError

from captchas.app_logging import setup_logger
from captchas.routes import images
from captchas.services import store


def empty_exception(error: HTTPException) -> Response:
    """Respond to an error with its status code and headers, but no page."""
    if error.response is not None:
        return error.response
    return make_response('', error.code)


def create_web_app() -> Flask:
    """Initialize and configure the captcha image application."""
    app = Flask('captchas')
    app.config.from_pyfile('config.py')

    setup_logger(app.config['LOGLEVEL'],
                 json_format=str(app.config['LOG_JSON']) == '1')
    store.init_app(app)

    # The store, renderer and resolver are built on first use, from
    # app.config as it is then.
    prefix = app.config['CAPTCHA_URL_PREFIX'].rstrip('/')
    app.register_blueprint(images.blueprint, url_prefix=prefix)
    app.errorhandler(NotFound)(empty_exception)
    app.errorhandler(InternalServerError)(empty_exception)
    return app
