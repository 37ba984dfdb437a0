import re
from urllib.parse import quote

from octopotion.exceptions import TemplateError
from octopotion.utils import identifier

PLACEHOLDER = re.compile(r':(\w+)')


def quote_segment(value):
    return quote(identifier(value), safe='')


class Route(object):
    """
    A path template with ``:name`` placeholders, such as ``/repos/show/:id``.

    Values are converted with :func:`str` and URL-quoted. A ``list`` or ``tuple`` value is rendered as path segments,
    each quoted on its own and joined with ``/``:

    >>> Route('/repos/show/:id').render(id=['joe', 'proj', 'tags'])
    '/repos/show/joe/proj/tags'

    :param str rule: path template
    """

    def __init__(self, rule):
        self.rule = rule

    @property
    def placeholders(self):
        return PLACEHOLDER.findall(self.rule)

    def render(self, **values):
        """
        :raises TemplateError: if a placeholder has no value
        """
        def substitute(match):
            name = match.group(1)
            value = values.get(name)
            if value is None:
                raise TemplateError(self.rule, name)

            if isinstance(value, (list, tuple)):
                if not value or any(v is None for v in value):
                    raise TemplateError(self.rule, name)
                return '/'.join(quote_segment(v) for v in value)
            return quote_segment(value)

        return PLACEHOLDER.sub(substitute, self.rule)

    def join(self, *segments):
        """
        :return: a new :class:`Route` with fixed segments appended
        """
        return self.__class__('/'.join((self.rule.rstrip('/'),) + tuple(quote_segment(s) for s in segments)))

    def __eq__(self, other):
        return isinstance(other, Route) and self.rule == other.rule

    def __hash__(self):
        return hash(self.rule)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, repr(self.rule))
