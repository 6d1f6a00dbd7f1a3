"""Provides Flask integration for the captcha image endpoints."""

from flask import Blueprint, request, make_response, send_file, Response
from werkzeug.datastructures import CombinedMultiDict

from captchas.controllers.captcha_image import current_resolver

import logging

logger = logging.getLogger(__name__)
blueprint = Blueprint('images', __name__, url_prefix='')

METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE']


@blueprint.route('/<path:filename>', methods=METHODS)
def captcha_image(filename: str) -> Response:
    """Provide the image for a captcha challenge."""
    # Form values take precedence over the query string.
    params = CombinedMultiDict([request.form, request.args])
    data, code, headers = current_resolver().resolve(request.path, params)
    logger.debug('Serving %s', data['filename'])
    response = send_file(data['image'], mimetype=data['mimetype'],
                         conditional=True, etag=False)
    # Replaces the cache headers set by send_file.
    response.headers.update(headers)
    return response


@blueprint.route('/status', methods=['GET'])
def service_status() -> Response:
    """Get if the app is running."""
    return make_response("OK")
