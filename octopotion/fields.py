import logging
from datetime import datetime

import aniso8601

from octopotion.schema import Schema
from octopotion.utils import get_value

log = logging.getLogger(__name__)


class Raw(Schema):
    """
    This is the base class for all field types, can be given any JSON-schema.

    >>> f = fields.Raw({"type": "string"}, nullable=True)
    >>> f.response
    {'type': ['string', 'null']}

    :param schema: JSON-schema for field, or :class:`callable` resolving to a JSON-schema when called
    :param default: optional default value; may be a callable with no arguments
    :param attribute: attribute name on the resource, optional; defaults to the key of the field.
    :param nullable: whether the field is nullable.
    :param title: optional title for JSON schema
    :param description: optional description for JSON schema
    """

    def __init__(self, schema, default=None, attribute=None, nullable=False, title=None, description=None):
        self._schema = schema
        self._default = default
        self.attribute = attribute
        self.nullable = nullable
        self.title = title
        self.description = description

    def _finalize_schema(self, schema):
        """
        :return: new schema updated for field `nullable`, `title`, `description` and `default` attributes.
        """
        schema = dict(schema)

        if "null" in schema.get("type", []):
            self.nullable = True
        elif self.nullable:
            if "enum" in schema and None not in schema["enum"]:
                schema["enum"] = schema["enum"] + [None]

            if "type" in schema:
                type_ = schema["type"]
                if isinstance(type_, (str, dict)):
                    schema["type"] = [type_, "null"]
                else:
                    schema["type"] = type_ + ["null"]
            elif len(schema) == 1 and "$ref" in schema:
                schema = {"anyOf": [schema, {"type": "null"}]}
            else:
                log.warning('%s is nullable but "null" type cannot be added', self)

        for attr in ("default", "title", "description"):
            value = getattr(self, attr)
            if value is not None:
                schema[attr] = value
        return schema

    @property
    def default(self):
        if callable(self._default):
            return self._default()
        return self._default

    @default.setter
    def default(self, value):
        self._default = value

    def schema(self):
        schema = self._schema
        if callable(schema):
            schema = schema()

        if isinstance(schema, Schema):
            read_schema, write_schema = schema.response, schema.request
        elif isinstance(schema, tuple):
            read_schema, write_schema = schema
        else:
            return self._finalize_schema(schema), self._finalize_schema(schema)

        return self._finalize_schema(read_schema), self._finalize_schema(write_schema)

    def format(self, value):
        """
        Format a Python value representation for output in JSON. Noop by default.
        """
        if value is not None:
            return self.formatter(value)
        return value

    def convert(self, instance, validate=True):
        """
        Convert a JSON value representation to a Python object. Noop by default.
        """
        if validate:
            instance = super(Raw, self).convert(instance)

        if instance is not None:
            return self.converter(instance)
        return instance

    def formatter(self, value):
        return value

    def converter(self, value):
        return value

    def output(self, key, obj):
        key = key if self.attribute is None else self.attribute
        return self.format(get_value(key, obj, self.default))

    def __repr__(self):
        return '{}(attribute={})'.format(self.__class__.__name__, repr(self.attribute))


class String(Raw):
    """
    :param int min_length: minimum length of string
    :param int max_length: maximum length of string
    :param str pattern: regex pattern that the string must match
    :param list enum: list of strings with enumeration
    """

    def __init__(self, min_length=None, max_length=None, pattern=None, enum=None, format=None, **kwargs):
        schema = {"type": "string"}

        if enum is not None:
            enum = list(enum)

        for v, k in ((min_length, 'minLength'),
                     (max_length, 'maxLength'),
                     (pattern, 'pattern'),
                     (enum, 'enum'),
                     (format, 'format')):
            if v is not None:
                schema[k] = v

        super(String, self).__init__(schema, **kwargs)


class DateTimeString(Raw):
    """
    A field for date-time strings. Accepts ISO8601 as well as the ``2008/03/14 05:36:07 -0700`` form the service
    returns; values are always formatted as ISO8601.

    :param str fallback_format: :func:`datetime.strptime` format tried when a value is not ISO8601
    """

    def __init__(self, fallback_format='%Y/%m/%d %H:%M:%S %z', **kwargs):
        self.fallback_format = fallback_format
        super(DateTimeString, self).__init__({"type": "string", "format": "date-time"}, **kwargs)

    def formatter(self, value):
        return value.isoformat()

    def converter(self, value):
        try:
            return aniso8601.parse_datetime(value)
        except ValueError:
            if self.fallback_format is None:
                raise
            return datetime.strptime(value, self.fallback_format)


class Uri(String):
    def __init__(self, **kwargs):
        super(Uri, self).__init__(format="uri", **kwargs)


class Email(String):
    def __init__(self, **kwargs):
        super(Email, self).__init__(format="email", **kwargs)


class Boolean(Raw):
    def __init__(self, **kwargs):
        super(Boolean, self).__init__({"type": "boolean"}, **kwargs)

    def format(self, value):
        return bool(value)


class Integer(Raw):

    def __init__(self, minimum=None, maximum=None, default=None, **kwargs):
        schema = {"type": "integer"}

        if minimum is not None:
            schema['minimum'] = minimum
        if maximum is not None:
            schema['maximum'] = maximum

        super(Integer, self).__init__(schema, default=default, **kwargs)

    def formatter(self, value):
        return int(value)


class Inline(Raw):
    """
    Decodes a nested JSON object into an instance of another resource, such as a user's plan.

    :param resource: a :class:`Resource` class
    """

    def __init__(self, resource, **kwargs):
        self.target = resource
        super(Inline, self).__init__(lambda: self.target.schema.response, **kwargs)

    def formatter(self, item):
        return self.target.schema.format(item)

    def converter(self, value):
        if isinstance(value, self.target):
            return value
        if not isinstance(value, dict):
            raise ValueError('Expected an object for {}, got {!r}'.format(self.target.meta.name, value))
        return self.target.from_record(value)
