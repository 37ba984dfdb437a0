import logging
from collections import OrderedDict

from werkzeug.utils import cached_property
from jsonschema import Draft4Validator, ValidationError, FormatChecker

from octopotion.exceptions import ValidationError as OctopotionValidationError

log = logging.getLogger(__name__)


class Schema(object):
    """
    The base class for all types with a schema in Octopotion. Has :attr:`response` and a :attr:`request` attributes
    for the schema to be used, respectively, for decoding records returned by the service and for validating values
    sent to it.

    Any class inheriting from schema needs to implement :meth:`schema`.

    ..  attribute:: response

        JSON-schema describing data returned by the service.

    .. attribute:: request

        JSON-schema used for validation of values before they are sent to the service.

    """

    def schema(self):
        """
        Abstract method returning the JSON schema used by both :attr:`response` and :attr:`request`.

        :return: a JSON-schema or a tuple of JSON-schemas in the format ``(response_schema, request_schema)``
        """
        raise NotImplementedError()

    @cached_property
    def response(self):
        schema = self.schema()
        if isinstance(schema, tuple):
            return schema[0]
        return schema

    @cached_property
    def request(self):
        schema = self.schema()
        if isinstance(schema, tuple):
            return schema[1]
        return schema

    @cached_property
    def _validator(self):
        Draft4Validator.check_schema(self.request)
        return Draft4Validator(self.request, format_checker=FormatChecker())

    def format(self, value):
        """
        Formats a python object into its plain JSON representation. Noop by default.
        """
        return value

    def validate(self, instance, root=None):
        """
        Validates a value against :attr:`request`.

        :raises OctopotionValidationError: if validation failed
        """
        validator = self._validator
        try:
            validator.validate(instance)
        except ValidationError:
            raise OctopotionValidationError(validator.iter_errors(instance), argument=instance, root=root)
        return instance

    def convert(self, instance):
        """
        Validates a deserialized JSON value against :attr:`request` and converts it into a python object.
        """
        return self.validate(instance)


class FieldSet(Schema):
    """
    A schema representation of a dictionary of :class:`fields.Raw` objects. Used by resources to turn decoded
    records into attribute dictionaries.

    :param dict fields: a dictionary of :class:`fields.Raw` objects
    """

    def __init__(self, fields):
        self.fields = OrderedDict(sorted((fields or {}).items()))

    def schema(self):
        return {
            "type": "object",
            "properties": OrderedDict((key, field.response) for key, field in self.fields.items())
        }

    def attributes(self):
        return [field.attribute or key for key, field in self.fields.items()]

    def format(self, item):
        return OrderedDict((key, field.output(key, item)) for key, field in self.fields.items())

    def convert(self, record):
        """
        Converts a record decoded from a response into a dictionary of attributes. Keys without a matching field
        are dropped; missing keys take the field default.

        :param dict record: decoded JSON object
        :return: dictionary keyed by field attribute
        """
        result = {}

        for key, field in self.fields.items():
            if key in record:
                value = field.convert(record[key], validate=False)
            else:
                value = field.default
            result[field.attribute or key] = value

        ignored = [key for key in record if key not in self.fields]
        if ignored:
            log.debug('Ignoring unknown keys %s', ', '.join(sorted(ignored)))
        return result
