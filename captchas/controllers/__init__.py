"""Request controllers for the captcha image service."""

from . import captcha_image
