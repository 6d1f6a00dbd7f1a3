"""
Captcha image service.

The captcha image service is a Flask application that serves the images for
challenges created elsewhere. A client asks for ``/captcha/<id>.png``; the
service looks up the challenge identified by ``<id>``, draws its solution as
a distorted image, and returns the PNG with caching disabled so that browsers
always refetch the current challenge.

Challenges themselves (their solutions and expiry) are held in a Redis
key-value store that is written by whichever service issues the challenge.
This service only reads from that store, except when the client asks for a
different solution to the same challenge by adding ``?reload=x`` to the URL:
in that case the stored solution is replaced before the image is drawn.

Query parameters
----------------
``reload``
    Any non-empty value requests a new solution for the same identifier.
    A value that changes on each request (e.g. the current time) also keeps
    browsers from reusing a cached image.
``w``, ``h``
    Width and height of the image, in pixels. Values that are not positive
    integers, or that exceed the configured maximum, are ignored.
"""
