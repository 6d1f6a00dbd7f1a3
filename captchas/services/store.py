"""
Internal service API for the challenge store.

Challenges are created by the service that asks the question (e.g. a
registration form), and are kept in Redis under ``<prefix><identifier>``,
with an expiry. The value is the solution: the text the user is asked to
enter. This module only reads those values, and replaces them when the client
asks to reload a challenge; it never creates or expires challenges.
"""

import abc
import secrets
import string
import threading
from typing import Optional

from flask import Flask, current_app
import redis
from redis.cluster import RedisCluster
import fakeredis

from .exceptions import ChallengeUnknown, ReloadFailed, StoreUnavailable

import logging

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'captchas.store'

init_lock = threading.RLock()
"""Held while the store, renderer and resolver of an app are created."""


def _generate_solution(like: str) -> str:
    """Generate a random solution with the same shape as ``like``."""
    if like.isdigit():
        alphabet = string.digits
    else:
        alphabet = string.ascii_uppercase + string.digits
    return ''.join(secrets.choice(alphabet) for _ in range(len(like)))


class ChallengeStore(abc.ABC):
    """Where the solutions of challenges are kept."""

    @abc.abstractmethod
    def get(self, identifier: str) -> str:
        """
        Get the solution of a challenge.

        Raises
        ------
        :class:`ChallengeUnknown`
            There is no challenge with this identifier, or it has expired.

        """

    @abc.abstractmethod
    def reload(self, identifier: str) -> None:
        """
        Replace the solution of a challenge, keeping its identifier.

        Raises
        ------
        :class:`ChallengeUnknown`
            There is no challenge with this identifier, or it has expired.
        :class:`ReloadFailed`
            The new solution could not be stored.

        """


class RedisChallengeStore(ChallengeStore):
    """
    Reads challenges from Redis.

    The Redis client is thread safe, and connections are attached at the time
    a command is executed. A single instance can be shared by all requests.
    """

    def __init__(self, host: str, port: int, db: int,
                 prefix: str = 'captcha:', cluster: bool = False,
                 fake: bool = False) -> None:
        """Open the connection to Redis."""
        logger.debug('New Redis connection at %s, port %s', host, port)
        if fake:
            self.r = fakeredis.FakeStrictRedis(decode_responses=True)
        elif cluster:
            self.r = RedisCluster(host=host, port=port,
                                  decode_responses=True)
        else:
            self.r = redis.StrictRedis(host=host, port=port, db=db,
                                       decode_responses=True)
        self._prefix = prefix

    def _key(self, identifier: str) -> str:
        return f'{self._prefix}{identifier}'

    def get(self, identifier: str) -> str:
        """Get the solution of a challenge."""
        try:
            solution: Optional[str] = self.r.get(self._key(identifier))
        except redis.exceptions.ConnectionError as e:
            raise StoreUnavailable(f'Connection failed: {e}') from e
        if not solution:
            raise ChallengeUnknown(f'No such challenge: {identifier}')
        return solution

    def reload(self, identifier: str) -> None:
        """
        Replace the solution of a challenge.

        The new solution has as many characters as the old one, and is
        made of digits only if the old one was. The challenge keeps the
        time it has left before it expires.
        """
        old = self.get(identifier)
        try:
            replaced = self.r.set(self._key(identifier),
                                  _generate_solution(old),
                                  xx=True, keepttl=True)
        except redis.exceptions.ConnectionError as e:
            raise StoreUnavailable(f'Connection failed: {e}') from e
        except redis.exceptions.RedisError as e:
            raise ReloadFailed(f'Failed to reload: {e}') from e
        if not replaced:    # Expired between the read and the write.
            raise ChallengeUnknown(f'No such challenge: {identifier}')
        logger.debug('Reloaded challenge %s', identifier)


def init_app(app: Flask) -> None:
    """Set default configuration parameters for an application instance."""
    app.config.setdefault('REDIS_HOST', 'localhost')
    app.config.setdefault('REDIS_PORT', '6379')
    app.config.setdefault('REDIS_DATABASE', '0')
    app.config.setdefault('REDIS_CLUSTER', '0')
    app.config.setdefault('REDIS_FAKE', False)
    app.config.setdefault('CAPTCHA_KEY_PREFIX', 'captcha:')


def get_store(app: Flask) -> RedisChallengeStore:
    """Get a new store using the configuration of ``app``."""
    config = app.config
    return RedisChallengeStore(
        config.get('REDIS_HOST', 'localhost'),
        int(config.get('REDIS_PORT', '6379')),
        int(config.get('REDIS_DATABASE', '0')),
        prefix=config.get('CAPTCHA_KEY_PREFIX', 'captcha:'),
        cluster=str(config.get('REDIS_CLUSTER', '0')) == '1',
        fake=str(config.get('REDIS_FAKE', '')).lower() in ('1', 'true')
    )


def current_store() -> ChallengeStore:
    """Get/create the :class:`.ChallengeStore` for this application."""
    app = current_app._get_current_object()    # type: ignore
    with init_lock:
        if EXTENSION_KEY not in app.extensions:
            app.extensions[EXTENSION_KEY] = get_store(app)
    store: ChallengeStore = app.extensions[EXTENSION_KEY]
    return store
