"""
Draws challenge images.

The image depicts the solution of a challenge, taken from the
:mod:`.store`, as distorted text on a noisy background. Drawing is done by
:class:`captcha.image.ImageCaptcha`.
"""

import abc
from typing import List, Optional

from flask import Flask, current_app
from captcha.image import ImageCaptcha

from .exceptions import RenderFailed, StoreUnavailable
from .store import ChallengeStore, current_store, init_lock

import logging

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'captchas.renderer'


class Renderer(abc.ABC):
    """Turns a challenge identifier into an encoded image."""

    @abc.abstractmethod
    def render(self, identifier: str, width: int, height: int) -> bytes:
        """
        Draw the image for a challenge.

        Parameters
        ----------
        identifier : str
            Names the challenge.
        width : int
        height : int
            Size of the image, in pixels.

        Returns
        -------
        bytes
            PNG image data.

        Raises
        ------
        :class:`ChallengeUnknown`
            There is no challenge with this identifier.
        :class:`RenderFailed`
            The image could not be drawn.

        """


class ImageCaptchaRenderer(Renderer):
    """Draws the solution stored for a challenge."""

    def __init__(self, store: ChallengeStore,
                 fonts: Optional[List[str]] = None,
                 font_sizes: Optional[List[int]] = None) -> None:
        self.store = store
        self.fonts = fonts
        self.font_sizes = font_sizes

    def render(self, identifier: str, width: int, height: int) -> bytes:
        """Draw the image for a challenge."""
        try:
            solution = self.store.get(identifier)
        except StoreUnavailable as e:
            raise RenderFailed(f'Could not get challenge: {e}') from e
        image = ImageCaptcha(width=width, height=height, fonts=self.fonts,
                             font_sizes=self.font_sizes)
        try:
            data = image.generate(solution, format='png')
        except (OSError, ValueError) as e:
            raise RenderFailed(f'Could not draw {identifier}: {e}') from e
        return data.getvalue()


def get_renderer(app: Flask, store: ChallengeStore) -> Renderer:
    """Get a new renderer using the configuration of ``app``."""
    font = app.config.get('CAPTCHA_FONT')
    return ImageCaptchaRenderer(store, fonts=[font] if font else None)


def current_renderer() -> Renderer:
    """Get/create the :class:`.Renderer` for this application."""
    app = current_app._get_current_object()    # type: ignore
    with init_lock:
        if EXTENSION_KEY not in app.extensions:
            app.extensions[EXTENSION_KEY] = get_renderer(app,
                                                         current_store())
    renderer: Renderer = app.extensions[EXTENSION_KEY]
    return renderer
