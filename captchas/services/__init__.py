"""Integrations with the challenge store and the image renderer."""

from .exceptions import ChallengeUnknown, ReloadFailed, RenderFailed, \
    StoreUnavailable
from .renderer import Renderer, ImageCaptchaRenderer, current_renderer
from .store import ChallengeStore, RedisChallengeStore, current_store
