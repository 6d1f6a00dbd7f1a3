"""
Provides the captcha image controller.

The image to serve is named by the last component of the request path: the
file name is the challenge identifier, and the file extension is the image
format. For example, ``/captcha/LBm5vMjHDtdUfaWYXiQX.png`` is a PNG image of
the challenge ``LBm5vMjHDtdUfaWYXiQX``. Only PNG images are served.

Query parameters are applied in order before the image is drawn: ``reload``
asks the store for a new solution, then ``h`` and ``w`` set the image size.
Unusable ``h`` and ``w`` values are ignored.

The image is drawn in full before a response is started, so that a failure
to draw it can be reported with a proper status code.
"""

from http import HTTPStatus as status
import io
import posixpath
import re
import threading
from typing import Mapping, Optional, Tuple

from flask import Flask, current_app
from werkzeug.exceptions import NotFound, InternalServerError
from werkzeug.wrappers import Response

from captchas.domain import Dimensions, ImageFormat, ImageRequest
from captchas.services import ChallengeStore, Renderer, current_renderer, \
    current_store
from captchas.services.exceptions import ChallengeUnknown, ReloadFailed, \
    RenderFailed, StoreUnavailable
from captchas.services.store import init_lock

import logging

logger = logging.getLogger(__name__)

ResponseData = Tuple[dict, int, dict]

NO_CACHE_HEADERS = {
    'Cache-Control': 'no-cache, no-store, must-revalidate',
    'Pragma': 'no-cache',
    'Expires': '0'
}
"""Keep browsers and proxies from reusing an image after a reload."""

EXTENSION_KEY = 'captchas.resolver'

_INTEGER = re.compile(r'[+-]?[0-9]+')


def _not_found(headers: Optional[dict] = None) -> NotFound:
    response = Response(status=status.NOT_FOUND, headers=headers)
    return NotFound(response=response)


def _render_failed(headers: Optional[dict] = None) -> InternalServerError:
    response = Response(status=status.INTERNAL_SERVER_ERROR, headers=headers)
    return InternalServerError(response=response)


def parse_path(path: str) -> Tuple[str, str]:
    """
    Get the challenge identifier and file extension from a request path.

    Parameters
    ----------
    path : str
        E.g. ``/captcha/LBm5vMjHDtdUfaWYXiQX.png``.

    Returns
    -------
    str
        The identifier, e.g. ``LBm5vMjHDtdUfaWYXiQX``.
    str
        The extension, starting at the last ``.`` in the file name.

    Raises
    ------
    :class:`NotFound`
        Raised if the file name has no extension, or nothing before it.

    """
    _, filename = posixpath.split(path)
    dot = filename.rfind('.')
    if dot < 0:
        raise _not_found()
    identifier, extension = filename[:dot], filename[dot:]
    if not identifier or not extension:
        raise _not_found()
    return identifier, extension


def parse_dimension(value: Optional[str],
                    maximum: Optional[int] = None) -> Optional[int]:
    """Get an image dimension from a query parameter, if it is usable."""
    if not value or not _INTEGER.fullmatch(value):
        return None
    dimension = int(value)
    if dimension <= 0 or (maximum is not None and dimension > maximum):
        logger.debug('Dimension out of range: %i', dimension)
        return None
    return dimension


def describe(path: str, params: Mapping[str, str],
             max_width: Optional[int] = None,
             max_height: Optional[int] = None) -> ImageRequest:
    """Read what the client is asking for from the path and parameters."""
    identifier, extension = parse_path(path)
    return ImageRequest(
        identifier=identifier,
        extension=extension,
        format=ImageFormat.from_extension(extension),
        reload_requested=bool(params.get('reload')),
        width_override=parse_dimension(params.get('w'), max_width),
        height_override=parse_dimension(params.get('h'), max_height)
    )


class ImageResolver(object):
    """
    Turns requests for captcha images into responses.

    A single resolver serves all requests to an application, from any
    number of threads. The default image size is shared between them.
    """

    def __init__(self, renderer: Renderer, store: ChallengeStore,
                 width: int = 240, height: int = 80,
                 sticky_dimensions: bool = False,
                 max_width: Optional[int] = None,
                 max_height: Optional[int] = None) -> None:
        self.renderer = renderer
        self.store = store
        self.sticky_dimensions = sticky_dimensions
        self.max_width = max_width
        self.max_height = max_height
        self._defaults = Dimensions(width, height)
        self._lock = threading.Lock()

    @property
    def defaults(self) -> Dimensions:
        """Size of images for which the client does not ask otherwise."""
        with self._lock:
            return self._defaults

    def configure(self, width: Optional[int] = None,
                  height: Optional[int] = None) -> Dimensions:
        """Change the default image size."""
        with self._lock:
            self._defaults = Dimensions(
                self._defaults.width if width is None else width,
                self._defaults.height if height is None else height
            )
            return self._defaults

    def dimensions_for(self, image_request: ImageRequest) -> Dimensions:
        """
        Get the size at which to draw a requested image.

        If ``sticky_dimensions`` is set, the size asked for becomes the new
        default for all later requests.
        """
        if self.sticky_dimensions:
            return self.configure(image_request.width_override,
                                  image_request.height_override)
        defaults = self.defaults
        return Dimensions(
            image_request.width_override or defaults.width,
            image_request.height_override or defaults.height
        )

    def reload(self, identifier: str) -> None:
        """Ask the store for a new solution; failures are only logged."""
        try:
            self.store.reload(identifier)
        except (ChallengeUnknown, ReloadFailed, StoreUnavailable) as e:
            logger.warning('Could not reload %s: %s', identifier, e)

    def resolve(self, path: str, params: Mapping[str, str]) -> ResponseData:
        """
        Get the image named by a request path.

        Parameters
        ----------
        path : str
            The request path; only the last component is used.
        params : Mapping
            Query (and form) parameters: ``reload``, ``w``, and ``h``.

        Returns
        -------
        dict
            ``image`` (a buffer with the encoded image), ``mimetype``, and
            ``filename``.
        int
            HTTP status code.
        dict
            Response headers.

        Raises
        ------
        :class:`NotFound`
            The path does not name an image in a supported format, or the
            challenge does not exist.
        :class:`InternalServerError`
            The image could not be drawn.

        """
        image_request = describe(path, params, self.max_width,
                                 self.max_height)
        logger.debug('Requested image: %s', image_request)
        headers = dict(NO_CACHE_HEADERS)

        if image_request.reload_requested:
            self.reload(image_request.identifier)
        size = self.dimensions_for(image_request)

        if image_request.format is ImageFormat.UNSUPPORTED:
            logger.debug('Unsupported format: %s', image_request.extension)
            raise _not_found(headers)
        try:
            content = self.renderer.render(image_request.identifier,
                                           size.width, size.height)
        except ChallengeUnknown as e:
            logger.debug('No such challenge: %s', image_request.identifier)
            raise _not_found(headers) from e
        except RenderFailed as e:
            logger.error('Could not render %s: %s', image_request.filename, e)
            raise _render_failed(headers) from e

        data = {
            'image': io.BytesIO(content),
            'mimetype': image_request.format.mimetype,
            'filename': image_request.filename
        }
        return data, status.OK, headers


def get_resolver(app: Flask) -> ImageResolver:
    """Get a new resolver using the configuration of ``app``."""
    config = app.config
    return ImageResolver(
        current_renderer(),
        current_store(),
        width=int(config.get('CAPTCHA_WIDTH', 240)),
        height=int(config.get('CAPTCHA_HEIGHT', 80)),
        sticky_dimensions=str(
            config.get('CAPTCHA_STICKY_DIMENSIONS', '0')
        ) == '1',
        max_width=int(config.get('CAPTCHA_MAX_WIDTH', 2000)),
        max_height=int(config.get('CAPTCHA_MAX_HEIGHT', 2000))
    )


def current_resolver() -> ImageResolver:
    """Get/create the :class:`.ImageResolver` for this application."""
    app = current_app._get_current_object()    # type: ignore
    with init_lock:
        if EXTENSION_KEY not in app.extensions:
            app.extensions[EXTENSION_KEY] = get_resolver(app)
    resolver: ImageResolver = app.extensions[EXTENSION_KEY]
    return resolver
