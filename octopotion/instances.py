class ResourceSet(list):
    """
    An ordered list of resource items returned by a plural find.

    .. attribute:: owner

        Optional item the collection belongs to, e.g. the user whose repositories these are. The collection does not
        own it.

    """

    def __init__(self, items=(), owner=None):
        super(ResourceSet, self).__init__(items)
        self.owner = owner

    def __repr__(self):
        return '{}({}, owner={!r})'.format(self.__class__.__name__, list.__repr__(self), self.owner)


class RepositorySet(ResourceSet):
    """
    Repositories of a user. When the user is the authenticated login, the items were read uncached and include
    private repositories.
    """

    def __init__(self, items=(), user=None, authenticated=False):
        super(RepositorySet, self).__init__(items, owner=user)
        self.authenticated = authenticated

    @property
    def user(self):
        return self.owner

    @user.setter
    def user(self, value):
        self.owner = value

    @property
    def names(self):
        return [repository.name for repository in self]

    def find(self, name):
        for repository in self:
            if repository.name == name:
                return repository
        return None

    def private(self):
        return RepositorySet([r for r in self if r.private], user=self.user, authenticated=self.authenticated)


class KeySet(ResourceSet):

    @property
    def titles(self):
        return [key.title for key in self]

    def find(self, title):
        for key in self:
            if key.title == title:
                return key
        return None
