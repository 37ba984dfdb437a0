from octopotion import fields
from octopotion.exceptions import AuthenticationRequiredError
from octopotion.instances import RepositorySet, KeySet, ResourceSet
from octopotion.resource import Resource
from octopotion.shapes import validate_args, validate_hash
from octopotion.utils import identifier


class Plan(Resource):
    """
    The plan of a user; only ever read as part of a user.
    """

    class Schema:
        name = fields.String()
        collaborators = fields.Integer()
        space = fields.Integer()
        private_repos = fields.Integer()

    class Meta:
        id_attribute = 'name'


class Key(Resource):
    """
    An SSH public key of the authenticated user.
    """

    class Schema:
        id = fields.Integer()
        title = fields.String()
        key = fields.String()

    class Meta:
        name = 'public_key'
        resource_path = '/user/keys'


class Tag(Resource):

    class Schema:
        name = fields.String()
        hash = fields.String()

    class Meta:
        name = 'tag'
        resource_path = '/repos/show/:id'
        id_attribute = 'name'

    @classmethod
    def all(cls, options=None, **kwargs):
        """
        Reads all tags of a repository. The service returns tags as an object of names to commit hashes::

            Tag.all(user='joe', repo='proj')
            Tag.all({'user': 'joe', 'repository': repository})

        :return: :class:`ResourceSet` of tags, in response order
        """
        options = dict(options or {}, **kwargs)
        user = options.get('user')
        repo = options.get('repo', options.get('repository'))

        if isinstance(repo, Repository):
            user = user or repo.owner
            repo = repo.name

        user, repo = identifier(user), identifier(repo)
        validate_args([(user, 'user'), (repo, 'repo')])
        return cls.find_plural([user, repo, 'tags'], transform=lambda pair: {'name': pair[0], 'hash': pair[1]})


class Repository(Resource):

    class Schema:
        name = fields.String()
        owner = fields.String()
        description = fields.String(nullable=True)
        url = fields.Uri()
        homepage = fields.String(nullable=True)
        fork = fields.Boolean()
        private = fields.Boolean()
        forks = fields.Integer()
        watchers = fields.Integer()
        open_issues = fields.Integer()
        created_at = fields.DateTimeString(nullable=True)
        pushed_at = fields.DateTimeString(nullable=True)

    class Meta:
        plural_name = 'repositories'
        resource_path = '/repos/show/:id'
        find_path = '/repos/search/:query'
        id_attribute = 'name'
        id_shapes = ('user', 'repo')
        query_shape = 'query'

    @classmethod
    def find(cls, *args, **options):
        """
        Reads one repository, ``Repository.find('fcoury', 'octopi')`` or
        ``Repository.find(user='fcoury', name='octopi')``; with only a user, reads all repositories of that user.
        """
        if args:
            return super(Repository, cls).find(*args)

        validate_hash(options)
        user = options.get('user')
        name = options.get('name', options.get('repo', options.get('repository')))

        if name is None:
            return cls.all(user)
        return super(Repository, cls).find(user, name)

    @classmethod
    def all(cls, user, cache=True):
        user = identifier(user)
        validate_args([(user, 'user')])
        return cls.find_plural([user], cache=cache)

    @classmethod
    def create(cls, owner, name, **options):
        """
        Creates a repository for the authenticated user.

        :param owner: the owning user (or its login); must be the authenticated login
        :param str name: repository name
        :param options: e.g. ``description``, ``homepage``, ``public``
        :raises AuthenticationRequiredError: if the session is read-only or authenticated as another login
        """
        validate_args([(owner, 'user'), (name, 'repo')])

        api = cls.manager.api
        if not api.read_only and identifier(owner) != api.login:
            raise AuthenticationRequiredError('create a repository for {}'.format(identifier(owner)))

        data = dict(options, name=name)
        return cls.manager.create('/repos/create', data)

    def tags(self):
        return Tag.all(user=self.owner, repo=self.name)

    def __str__(self):
        return '{}/{}'.format(self.owner, self.name)


class User(Resource):

    class Schema:
        id = fields.Integer()
        login = fields.String()
        name = fields.String(nullable=True)
        company = fields.String(nullable=True)
        blog = fields.String(nullable=True)
        location = fields.String(nullable=True)
        email = fields.Email(nullable=True)
        created_at = fields.DateTimeString(nullable=True)
        following_count = fields.Integer()
        followers_count = fields.Integer()
        public_repo_count = fields.Integer()
        public_gist_count = fields.Integer()
        private_repo_count = fields.Integer(nullable=True)
        private_gist_count = fields.Integer(nullable=True)
        owned_private_repo_count = fields.Integer(nullable=True)
        total_private_repo_count = fields.Integer(nullable=True)
        collaborators = fields.Integer(nullable=True)
        disk_usage = fields.Integer(nullable=True)
        plan = fields.Inline(Plan, nullable=True)

    class Meta:
        find_path = '/user/search/:query'
        resource_path = '/user/show/:id'
        id_attribute = 'login'
        id_shapes = ('user',)
        query_shape = 'user'

    @property
    def authenticated(self):
        """
        Whether this user is the login of the session.
        """
        return self.api is not None and not self.api.read_only and self.api.login == self.login

    def repositories(self):
        """
        Reads all repositories of this user. If the user is the authenticated login, the response is read uncached
        and includes private repositories.

        :return: :class:`RepositorySet`
        """
        authenticated = self.authenticated
        repositories = Repository.all(self.login, cache=not authenticated)
        return RepositorySet(repositories, user=self, authenticated=authenticated)

    def repository(self, options):
        """
        Reads one repository of this user, by name or by a dictionary of options.
        """
        if isinstance(options, str):
            options = {'name': options}
        validate_hash(options)
        return Repository.find(**dict({'user': self.login}, **options))

    def create_repository(self, name, **options):
        validate_args([(name, 'repo')])
        return Repository.create(self, name, **options)

    def keys(self):
        """
        Reads the SSH public keys of the authenticated user.

        :raises AuthenticationRequiredError: if the session is read-only; no request is sent
        """
        if self.manager.api.read_only:
            raise AuthenticationRequiredError('view keys')

        return KeySet(Key.find_plural((), cache=False), owner=self)

    def followers(self, deep=False):
        """
        Logins of the followers of this user.

        :param bool deep: read each follower as a :class:`User`, with one request per follower. Users with many
            followers may exceed the rate limit of the service.
        """
        return self._user_property('followers', deep)

    def following(self, deep=False):
        """
        Logins of the users this user follows.

        :param bool deep: read each one as a :class:`User`, with one request per user.
        """
        return self._user_property('following', deep)

    def _user_property(self, name, deep):
        logins = list(self.manager.item_property(self.login, name) or ())
        if not deep:
            return logins
        return ResourceSet(self.manager.resolve(logins), owner=self)
