def get_value(key, obj, default):
    if hasattr(obj, '__getitem__'):
        try:
            return obj[key]
        except (IndexError, TypeError, KeyError):
            pass
    return getattr(obj, key, default)


def identifier(value):
    """
    Returns the string form of an identifier; resources convert to their identity (e.g. a user's login).
    """
    if value is None:
        return None
    return str(value)


class AttributeDict(dict):
    __getattr__ = dict.__getitem__
    __setattr__ = dict.__setitem__
