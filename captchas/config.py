"""Flask configuration."""
import os

#################### Captcha images ####################
CAPTCHA_URL_PREFIX = os.environ.get('CAPTCHA_URL_PREFIX', '/captcha')
"""Path under which captcha images are served.

The last path component of a request under this prefix names the image,
e.g. ``/captcha/LBm5vMjHDtdUfaWYXiQX.png``."""

CAPTCHA_WIDTH = os.environ.get('CAPTCHA_WIDTH', '240')
CAPTCHA_HEIGHT = os.environ.get('CAPTCHA_HEIGHT', '80')
"""Default image dimensions, in pixels."""

CAPTCHA_MAX_WIDTH = os.environ.get('CAPTCHA_MAX_WIDTH', '2000')
CAPTCHA_MAX_HEIGHT = os.environ.get('CAPTCHA_MAX_HEIGHT', '2000')
"""Largest dimensions a client may ask for with ``w`` and ``h``.

Larger values, and values that are not positive, are ignored, and the
default is used instead. Without this bound any request could make the
renderer allocate an arbitrarily large image."""

CAPTCHA_STICKY_DIMENSIONS = os.environ.get('CAPTCHA_STICKY_DIMENSIONS', '0')
"""If '1', ``w`` and ``h`` on a request become the new defaults.

This is how older deployments behaved: one request with ``?w=50&h=60``
changes the size of every image served afterwards by the same process, so a
later request without ``w`` or ``h`` is drawn at 50x60. With the default '0',
``w`` and ``h`` size only the image they are sent with, and the defaults change
only through ``ImageResolver.configure``. Shared defaults that any request can
repoint are surprising, so leave this off unless a client depends on it."""

CAPTCHA_FONT = os.environ.get('CAPTCHA_FONT', None)
"""Path to a TrueType font used to draw the challenge.

If not set, the fonts bundled with the ``captcha`` package are used."""

CAPTCHA_KEY_PREFIX = os.environ.get('CAPTCHA_KEY_PREFIX', 'captcha:')
"""Prefix of the Redis keys that hold challenge solutions."""


#################### Challenge store ####################
REDIS_HOST = os.environ.get('REDIS_HOST', 'localhost')
REDIS_PORT = os.environ.get('REDIS_PORT', '6379')
REDIS_DATABASE = os.environ.get('REDIS_DATABASE', '0')
REDIS_CLUSTER = os.environ.get('REDIS_CLUSTER', '0')

REDIS_FAKE = os.environ.get('REDIS_FAKE', False)
"""Use the FakeRedis library instead of a redis service.

Useful for testing, dev, beta."""


#################### Logging ####################
LOGLEVEL = os.environ.get('LOGLEVEL', 20)
LOG_JSON = os.environ.get('LOG_JSON', '1')
"""If '1', log records are written as JSON objects, one per line."""

