from octopotion.manager import Manager
from octopotion.routes import Route
from octopotion.schema import FieldSet
from octopotion.utils import AttributeDict

ROUTE_ATTRIBUTES = ('resource_path', 'find_path')


def _public(dct):
    return {k: v for k, v in dct.items() if not k.startswith('__')}


class ResourceMeta(type):

    def __new__(mcs, name, bases, members):
        class_ = super(ResourceMeta, mcs).__new__(mcs, name, bases, members)
        class_.meta = meta = AttributeDict(getattr(class_, 'meta', {}) or {})

        for base in bases:
            if hasattr(base, 'Meta'):
                meta.update(_public(base.Meta.__dict__))

        changes = _public(members['Meta'].__dict__) if 'Meta' in members else {}
        meta.update(changes)

        if not changes.get('name', None):
            meta['name'] = name.lower()
        if not changes.get('plural_name', None):
            meta['plural_name'] = '{}s'.format(meta['name'])

        for key in ROUTE_ATTRIBUTES:
            if isinstance(meta.get(key), str):
                meta[key] = Route(meta[key])

        schema = {}
        for base in bases:
            if hasattr(base, 'Schema'):
                schema.update(_public(base.Schema.__dict__))

        if 'Schema' in members:
            schema.update(_public(members['Schema'].__dict__))

        class_.schema = FieldSet(schema)

        if meta.manager is not None:
            meta.manager(class_)
        return class_


class Resource(metaclass=ResourceMeta):
    """
    A typed item of the remote service with a fixed set of fields.

    A resource is configured using the `Schema` and `Meta` attributes. Items are created from decoded response
    records by the resource's :class:`Manager`; they are snapshots and are never written back.

    :class:`Meta` class attributes:

    =====================  ==============================  ==============================================================================
    Attribute name         Default                         Description
    =====================  ==============================  ==============================================================================
    name                   ---                             Name of the resource and response key of a single item; defaults to the
                                                           lower-case of the class name
    plural_name            ---                             Response key of a collection; defaults to ``name`` followed by ``s``
    resource_path          ``None``                        Path template for reading an item, e.g. ``/user/show/:id``
    find_path              ``None``                        Path template for searching, e.g. ``/user/search/:query``
    id_attribute           ``'id'``                        Attribute holding the identity of an item
    id_shapes              ``()``                          Shapes that the identity arguments of :meth:`find` must match, in order
    query_shape            ``None``                        Shape that the query of :meth:`find_all` must match
    manager                :class:`Manager`                Manager class; one manager is created per resource class
    =====================  ==============================  ==============================================================================

    Usage example:

    .. code-block:: python

        class Organization(Resource):
            class Schema:
                login = fields.String()
                name = fields.String(nullable=True)

            class Meta:
                resource_path = '/organizations/:id'
                id_attribute = 'login'
                id_shapes = ('user',)

        api.add_resource(Organization)
        Organization.find('github')

    .. attribute:: api

        Back reference to the :class:`Api` this resource is registered with.

    .. attribute:: meta

        A :class:`AttributeDict` of configuration attributes collected from the :class:`Meta` attributes of the base
        classes. Path templates are stored as :class:`Route` objects.

    .. attribute:: schema

        A :class:`FieldSet` containing fields collected from the :class:`Schema` attributes of the base classes.

    """
    api = None
    meta = None
    schema = None
    manager = None

    def __init__(self, **attributes):
        unknown = set(attributes) - set(self.schema.attributes())
        if unknown:
            raise TypeError('{} has no attribute(s) {}'.format(self.__class__.__name__, ', '.join(sorted(unknown))))

        for key, field in self.schema.fields.items():
            attribute = field.attribute or key
            setattr(self, attribute, attributes.get(attribute, field.default))

    @classmethod
    def from_record(cls, record):
        return cls(**cls.schema.convert(record))

    @classmethod
    def find(cls, *identity):
        return cls.manager.find(*identity)

    @classmethod
    def find_all(cls, query):
        return cls.manager.find_all(query)

    @classmethod
    def find_plural(cls, segments, **kwargs):
        return cls.manager.find_plural(segments, **kwargs)

    @property
    def identity(self):
        return getattr(self, self.meta.id_attribute, None)

    def as_dict(self):
        return self.schema.format(self)

    def _attributes(self):
        return {attribute: getattr(self, attribute) for attribute in self.schema.attributes()}

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._attributes() == other._attributes()

    def __hash__(self):
        return hash((type(self), self.identity))

    def __str__(self):
        return str(self.identity)

    def __repr__(self):
        return '<{} {}={!r}>'.format(self.__class__.__name__, self.meta.id_attribute, self.identity)

    class Meta:
        name = None
        plural_name = None
        resource_path = None
        find_path = None
        id_attribute = 'id'
        id_shapes = ()
        query_shape = None
        manager = Manager
