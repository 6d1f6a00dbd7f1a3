"""Defines the core data structures for the captcha image service."""

from enum import Enum
from typing import NamedTuple, Optional


class ImageFormat(Enum):
    """Output formats, keyed by the file extension in the request path."""

    PNG = '.png'
    UNSUPPORTED = ''

    @property
    def mimetype(self) -> Optional[str]:
        """Content type of images in this format."""
        return _MIMETYPES.get(self)

    @classmethod
    def from_extension(cls, extension: str) -> 'ImageFormat':
        """Get the format for a file extension, e.g. ``'.png'``."""
        if extension == cls.PNG.value:
            return cls.PNG
        return cls.UNSUPPORTED


_MIMETYPES = {ImageFormat.PNG: 'image/png'}


class Dimensions(NamedTuple):
    """Size of a rendered image, in pixels."""

    width: int
    height: int


class ImageRequest(NamedTuple):
    """What a client asked for, as read from the path and query string."""

    identifier: str
    """Names the challenge; the file name in the path, minus extension."""

    extension: str
    """The file extension in the path, including the leading dot."""

    format: ImageFormat

    reload_requested: bool = False
    """Whether the client asked for a new solution to the challenge."""

    width_override: Optional[int] = None
    height_override: Optional[int] = None

    @property
    def filename(self) -> str:
        """File name of the requested image."""
        return self.identifier + self.extension
