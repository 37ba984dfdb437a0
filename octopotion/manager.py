import logging
from concurrent.futures import ThreadPoolExecutor

from octopotion import signals
from octopotion.exceptions import NotFoundError, TransportError, AuthenticationRequiredError, ValidationError
from octopotion.instances import ResourceSet
from octopotion.shapes import validate_args

log = logging.getLogger(__name__)

DEEP_RESOLUTION_POLICIES = ('sequential', 'concurrent')


def _lookup(response, key):
    if isinstance(response, dict):
        return response.get(key)
    return None


class Manager(object):
    """
    Reads items of a resource from the :class:`Api` the resource is registered with.

    Requests are built from the resource's ``Meta.resource_path`` and ``Meta.find_path`` routes. Identity and query
    arguments are checked against ``Meta.id_shapes`` and ``Meta.query_shape`` before any request is sent.

    Errors raised by the transport are not retried. The only translation is an HTTP 404 in :meth:`find`, which
    becomes :class:`NotFoundError`.

    :param octopotion.resource.Resource resource: resource class
    """

    def __init__(self, resource):
        self.resource = resource
        resource.manager = self

    @property
    def api(self):
        api = self.resource.api
        if api is None:
            raise RuntimeError('Resource "{}" is not registered with an Api.'.format(self.resource.meta.name))
        return api

    def _route(self, name):
        route = self.resource.meta.get(name)
        if route is None:
            raise RuntimeError('Resource "{}" does not declare a {}.'.format(self.resource.meta.name, name))
        return route

    def _get(self, path, cache=True):
        signals.before_find.send(self.resource, path=path)
        response = self.api.get(path, cache=cache)
        signals.after_find.send(self.resource, path=path, response=response)
        return response

    def _instance(self, record, path):
        if not isinstance(record, dict):
            raise TransportError(path=path, reason='Malformed {} record: {!r}'.format(self.resource.meta.name, record))
        try:
            return self.resource.from_record(record)
        except ValueError as e:
            raise TransportError(path=path,
                                 reason='Malformed {} record: {}'.format(self.resource.meta.name, e)) from e

    def find(self, *identity, cache=True):
        """
        Reads a single item.

        :param identity: one value per segment of the item's id, e.g. ``('fcoury',)`` or ``('fcoury', 'octopi')``
        :raises ValidationError: if the identity does not match ``Meta.id_shapes``
        :raises NotFoundError: if the service has no such item
        """
        meta = self.resource.meta
        if meta.id_shapes:
            if len(identity) != len(meta.id_shapes):
                raise ValidationError(argument=identity)
            validate_args(zip(identity, meta.id_shapes))

        path = self._route('resource_path').render(id=identity)
        id = '/'.join(str(i) for i in identity)

        try:
            response = self._get(path, cache)
        except TransportError as e:
            if e.status_code == 404:
                raise NotFoundError(self.resource, id) from e
            raise

        record = _lookup(response, meta.name)
        if not record:
            raise NotFoundError(self.resource, id)
        return self._instance(record, path)

    def find_all(self, query, cache=True):
        """
        Searches for items; an empty result is not an error.

        :return: :class:`ResourceSet`
        """
        meta = self.resource.meta
        if meta.query_shape:
            validate_args([(query, meta.query_shape)])

        path = self._route('find_path').render(query=query)
        response = self._get(path, cache)
        records = _lookup(response, meta.plural_name) or []
        return ResourceSet(self._instance(record, path) for record in records)

    def find_plural(self, segments, route='resource_path', key=None, transform=None, cache=True):
        """
        Reads a collection whose shape need not match the resource's fields.

        The route is rendered with ``id`` set to ``segments``. If the value under ``key`` (by default
        ``Meta.plural_name``) is an object, its ``(key, value)`` pairs are the raw items, in response order; if it is
        an array, its elements are.

        :param segments: path segments, e.g. ``['joe', 'proj', 'tags']``
        :param str route: name of the route in ``Meta``
        :param str key: response key
        :param callable transform: turns each raw item into a record of attributes
        :return: :class:`ResourceSet`
        """
        path = self._route(route).render(id=segments)
        response = self._get(path, cache)

        raw = _lookup(response, key or self.resource.meta.plural_name) or []
        items = list(raw.items()) if isinstance(raw, dict) else raw
        if transform is not None:
            items = [transform(item) for item in items]
        return ResourceSet(self._instance(record, path) for record in items)

    def item_property(self, identity, name, cache=True):
        """
        Reads a property of an item, such as the logins of a user's followers, from ``<resource_path>/<name>``.

        :return: the raw value, usually a list of identifiers
        """
        if not isinstance(identity, (list, tuple)):
            identity = (identity,)
        path = self._route('resource_path').join(name).render(id=identity)
        response = self._get(path, cache)

        if isinstance(response, dict):
            for value in response.values():
                return value
        return []

    def resolve(self, identities):
        """
        Reads each identity with :meth:`find`, one request per identity. The order of the result matches
        ``identities``; the first failure aborts the call.

        The ``OCTOPOTION_DEEP_RESOLUTION`` setting selects whether requests are sent one after the other
        (``'sequential'``) or from a thread pool (``'concurrent'``).
        """
        config = self.api.config
        policy = config.get('OCTOPOTION_DEEP_RESOLUTION', 'sequential')

        if policy not in DEEP_RESOLUTION_POLICIES:
            raise RuntimeError('Unknown deep resolution policy "{}"'.format(policy))

        identities = list(identities)
        log.debug('Resolving %d %s items (%s)', len(identities), self.resource.meta.name, policy)

        if policy == 'concurrent' and len(identities) > 1:
            with ThreadPoolExecutor(max_workers=config.get('OCTOPOTION_DEEP_RESOLUTION_WORKERS', 4)) as executor:
                return list(executor.map(self.find, identities))

        return [self.find(identity) for identity in identities]

    def create(self, path, data, key=None):
        """
        Creates an item; requires a session that is not read-only.

        :raises AuthenticationRequiredError: if the session is read-only; no request is sent
        """
        meta = self.resource.meta
        if self.api.read_only:
            raise AuthenticationRequiredError('create a {}'.format(meta.name))

        signals.before_create.send(self.resource, path=path, data=data)
        response = self.api.post(path, data)

        record = _lookup(response, key or meta.name)
        if not record:
            raise TransportError(path=path, reason='Response contains no {}'.format(meta.name))

        item = self._instance(record, path)
        signals.after_create.send(self.resource, item=item)
        return item
