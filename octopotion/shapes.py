"""
Shape contracts for values that end up in request paths.

Each shape is a string field whose JSON-schema a value must satisfy before any request is sent, e.g.::

    validate_args({'fcoury': 'user', 'octopi': 'repo'})
    validate_hash({'user': 'fcoury', 'name': 'octopi'})

"""
from collections.abc import Mapping

from octopotion import fields
from octopotion.exceptions import ValidationError
from octopotion.utils import identifier

NAME_PATTERN = r'^[A-Za-z0-9_.-]+$'

SHAPES = {
    'user': fields.String(min_length=1, pattern=NAME_PATTERN, description='username'),
    'repo': fields.String(min_length=1, pattern=NAME_PATTERN, description='repository name'),
    'query': fields.String(min_length=1, pattern=r'^[^/]+$', description='search query'),
    'sha': fields.String(pattern=r'^[a-f0-9]{40}$', description='SHA hash'),
    'state': fields.String(enum=['open', 'closed'], description='issue state'),
    'id': fields.String(pattern=r'^\d+$', description='numeric id'),
    'file': fields.String(min_length=1, pattern=r'^[^ /]+$', description='file name'),
}

OPTION_SHAPES = {
    'user': 'user',
    'login': 'user',
    'name': 'repo',
    'repo': 'repo',
    'repository': 'repo',
    'query': 'query',
    'sha': 'sha',
    'state': 'state',
    'id': 'id',
    'file': 'file',
}


def shape(name):
    """
    :param str name: shape tag, e.g. ``'user'``
    :return: the :class:`fields.String` for the shape
    :raises ValidationError: if no shape with that name exists
    """
    try:
        return SHAPES[name]
    except KeyError:
        raise ValidationError(argument=name)


def _check(value, name):
    field = shape(name)
    value = identifier(value)
    try:
        field.validate(value)
    except ValidationError as e:
        raise ValidationError(e.errors, argument=value, shape=name)
    return value


def validate_args(args):
    """
    Checks each value against its shape.

    :param args: a mapping of ``{value: shape}`` or an iterable of ``(value, shape)`` pairs
    :raises ValidationError: for the first value that does not satisfy its shape
    """
    pairs = args.items() if isinstance(args, Mapping) else args
    for value, name in pairs:
        _check(value, name)


def validate_hash(options):
    """
    Checks named options; every key must be a known option and every value given must satisfy the shape of its key.

    :param dict options: e.g. ``{'user': 'fcoury', 'name': 'octopi'}``
    :raises ValidationError: on an unknown key or a value of the wrong shape
    """
    for key, value in options.items():
        if key not in OPTION_SHAPES:
            raise ValidationError(argument=key)
        if value is None:
            continue
        _check(value, OPTION_SHAPES[key])
