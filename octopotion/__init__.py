import logging

import requests

from .exceptions import TransportError
from .resource import Resource
from .entities import Plan, Key, Tag, Repository, User

__all__ = (
    'Api',
    'Resource',
    'Plan',
    'Key',
    'Tag',
    'Repository',
    'User',
    'exceptions',
    'fields',
    'instances',
    'manager',
    'routes',
    'schema',
    'shapes',
    'signals'
)

log = logging.getLogger(__name__)

DEFAULT_RESOURCES = (Plan, Key, Tag, Repository, User)


class Api(object):
    """
    A session with the remote service. Resources registered with an :class:`Api` read their items through it.

    The session is read-only unless both a login and a token are given; credentials are sent with every request.

    Settings are read from ``config``; missing keys take these defaults:

    ======================================  ==================================  =========================================
    Key                                     Default                             Description
    ======================================  ==================================  =========================================
    ``OCTOPOTION_BASE_URL``                 ``https://github.com/api/v2/json``  Prefix of every request path
    ``OCTOPOTION_TIMEOUT``                  ``30``                              Request timeout in seconds
    ``OCTOPOTION_CACHE``                    ``False``                           Keep responses to cacheable GET requests
    ``OCTOPOTION_DEEP_RESOLUTION``          ``'sequential'``                    ``'sequential'`` or ``'concurrent'``
    ``OCTOPOTION_DEEP_RESOLUTION_WORKERS``  ``4``                               Thread pool size for ``'concurrent'``
    ======================================  ==================================  =========================================

    :param str login: login of the authenticated user
    :param str token: API token of the authenticated user
    :param str base_url: overrides ``OCTOPOTION_BASE_URL``
    :param dict config: settings
    :param requests.Session session: optional session to send requests with
    """

    def __init__(self, login=None, token=None, base_url=None, config=None, session=None):
        self.login = login
        self.token = token
        self.config = config = dict(config or {})

        config.setdefault('OCTOPOTION_BASE_URL', 'https://github.com/api/v2/json')
        config.setdefault('OCTOPOTION_TIMEOUT', 30)
        config.setdefault('OCTOPOTION_CACHE', False)
        config.setdefault('OCTOPOTION_DEEP_RESOLUTION', 'sequential')
        config.setdefault('OCTOPOTION_DEEP_RESOLUTION_WORKERS', 4)

        self.base_url = (base_url or config['OCTOPOTION_BASE_URL']).rstrip('/')
        self.session = session or requests.Session()
        self.resources = {}
        self._cache = {}

    @property
    def read_only(self):
        return not (self.login and self.token)

    def _params(self, params):
        params = dict(params or {})
        if not self.read_only:
            params.update(login=self.login, token=self.token)
        return params

    def _request(self, method, path, **kwargs):
        url = ''.join((self.base_url, path))
        log.debug('%s %s', method, url)

        try:
            response = self.session.request(method, url, timeout=self.config['OCTOPOTION_TIMEOUT'], **kwargs)
        except requests.RequestException as e:
            raise TransportError(path=path, reason=str(e)) from e

        if not 200 <= response.status_code < 300:
            log.debug('%s %s failed with status %d', method, url, response.status_code)
            raise TransportError(response.status_code, path)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(response.status_code, path, reason='Response is not valid JSON') from e

    def get(self, path, cache=True, **params):
        """
        Sends a GET request and returns the decoded response.

        :param str path: path relative to the base URL
        :param bool cache: whether the response may be served from and stored in the cache; the cache is only used
            when ``OCTOPOTION_CACHE`` is enabled
        :raises TransportError: on network failure, non-2xx status, or a response that is not JSON
        """
        params = self._params(params)
        cache = cache and self.config['OCTOPOTION_CACHE']
        key = (path, tuple(sorted(params.items())))

        if cache and key in self._cache:
            log.debug('GET %s served from cache', path)
            return self._cache[key]

        result = self._request('GET', path, params=params)

        if cache:
            self._cache[key] = result
        return result

    def post(self, path, data=None):
        return self._request('POST', path, data=self._params(data))

    def clear_cache(self):
        self._cache.clear()

    def add_resource(self, resource):
        """
        Register a :class:`Resource` class with this session.

        :param Resource resource: resource
        """
        # prevent resources from being added twice
        if resource in self.resources.values():
            return

        if resource.api is not None and resource.api != self:
            raise RuntimeError("Attempted to register a resource that is already registered with a different Api.")

        resource.api = self
        self.resources[resource.meta.name] = resource

    def add_resources(self, *resources):
        """
        Register several resources; registers :class:`Plan`, :class:`Key`, :class:`Tag`, :class:`Repository` and
        :class:`User` if none are given.
        """
        for resource in resources or DEFAULT_RESOURCES:
            self.add_resource(resource)

    def close(self):
        """
        Unregister all resources and close the HTTP session.
        """
        for resource in self.resources.values():
            resource.api = None
        self.resources = {}
        self.clear_cache()
        self.session.close()
