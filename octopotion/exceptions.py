from werkzeug.exceptions import BadRequest, NotFound, InternalServerError, Unauthorized
from werkzeug.http import HTTP_STATUS_CODES


class OctopotionException(Exception):
    werkzeug_exception = InternalServerError

    @property
    def status_code(self):
        return self.werkzeug_exception.code

    @property
    def message(self):
        return HTTP_STATUS_CODES.get(self.status_code, '')

    def as_dict(self):
        return {
            'status': self.status_code,
            'message': self.message
        }

    def __str__(self):
        return self.message


class ValidationError(OctopotionException):
    """
    Raised when a caller-supplied argument or option does not match its shape. Always raised before any request
    is sent.

    :param errors: iterable of :class:`jsonschema.ValidationError`
    :param argument: the offending value
    :param str shape: name of the shape the value was checked against
    """
    werkzeug_exception = BadRequest

    def __init__(self, errors=(), argument=None, shape=None, root=None):
        super(ValidationError, self).__init__()
        self.errors = list(errors)
        self.argument = argument
        self.shape = shape
        self.root = root

    @property
    def message(self):
        if self.shape is None:
            return 'Invalid argument {!r}'.format(self.argument)
        return '{!r} is not a valid {}'.format(self.argument, self.shape)

    def _complete_path(self, error):
        path = tuple(error.absolute_path)
        if self.root is not None:
            return (self.root,) + path
        return path

    def _format_errors(self):
        for error in self.errors:
            yield {
                'validationOf': {error.validator: error.validator_value},
                'path': self._complete_path(error),
                'message': error.message
            }

    def as_dict(self):
        dct = super(ValidationError, self).as_dict()
        dct['argument'] = self.argument
        dct['shape'] = self.shape
        dct['errors'] = list(self._format_errors())
        return dct


class TemplateError(OctopotionException):
    """
    Raised when a path template references a placeholder that was not given a value.
    """

    def __init__(self, rule, placeholder):
        super(TemplateError, self).__init__()
        self.rule = rule
        self.placeholder = placeholder

    @property
    def message(self):
        return 'No value for ":{}" in path template "{}"'.format(self.placeholder, self.rule)

    def as_dict(self):
        dct = super(TemplateError, self).as_dict()
        dct['rule'] = self.rule
        dct['placeholder'] = self.placeholder
        return dct


class NotFoundError(OctopotionException):
    werkzeug_exception = NotFound

    def __init__(self, resource, id=None):
        super(NotFoundError, self).__init__()
        self.resource = resource
        self.id = id

    @property
    def message(self):
        return '{} {!r} not found'.format(self.resource.meta.name, self.id)

    def as_dict(self):
        dct = super(NotFoundError, self).as_dict()
        dct['item'] = {
            "$type": self.resource.meta.name,
            "$id": self.id
        }
        return dct


class AuthenticationRequiredError(OctopotionException):
    werkzeug_exception = Unauthorized

    def __init__(self, operation=None):
        super(AuthenticationRequiredError, self).__init__()
        self.operation = operation

    @property
    def message(self):
        if self.operation:
            return 'To {}, you must be authenticated'.format(self.operation)
        return 'Authentication required'


class TransportError(OctopotionException):
    """
    Raised for any failure of the HTTP transport: network errors, non-2xx responses and bodies that are not JSON.

    :param status_code: HTTP status of the response, ``None`` if no response was received
    :param str path: request path
    :param str reason: optional description of the failure
    """

    def __init__(self, status_code=None, path=None, reason=None):
        super(TransportError, self).__init__()
        self._status_code = status_code
        self.path = path
        self.reason = reason

    @property
    def status_code(self):
        return self._status_code

    @property
    def message(self):
        if self.reason:
            return self.reason
        return HTTP_STATUS_CODES.get(self._status_code, 'Transport error')

    def as_dict(self):
        dct = super(TransportError, self).as_dict()
        dct['path'] = self.path
        return dct
