from datetime import datetime, timezone

from octopotion import Repository, Tag, User
from octopotion.exceptions import ValidationError, AuthenticationRequiredError, NotFoundError
from tests import BaseTestCase, FakeApi, repository_record


class RepositoryTestCase(BaseTestCase):

    def test_find(self):
        self.respond('/repos/show/fcoury/octopi', {'repository': repository_record('fcoury', 'octopi')})

        repository = Repository.find(user='fcoury', name='octopi')

        self.assertEqual('octopi', repository.name)
        self.assertEqual('fcoury', repository.owner)
        self.assertEqual(40, repository.watchers)
        self.assertFalse(repository.private)
        self.assertEqual(datetime(2009, 4, 17, 10, 21, 52, tzinfo=timezone.utc), repository.created_at)
        self.assertEqual('fcoury/octopi', str(repository))
        self.assertEqual(repository, Repository.find('fcoury', 'octopi'))
        self.assertRequests(['/repos/show/fcoury/octopi', '/repos/show/fcoury/octopi'])

    def test_find_not_found(self):
        with self.assertRaises(NotFoundError) as cx:
            Repository.find(user='fcoury', name='nothing')

        self.assertEqual('fcoury/nothing', cx.exception.id)

    def test_find_user_repositories(self):
        self.respond('/repos/show/fcoury', {'repositories': [
            repository_record('fcoury', 'octopi'),
            repository_record('fcoury', 'dotfiles')
        ]})

        self.assertEqual(['octopi', 'dotfiles'], [r.name for r in Repository.find(user='fcoury')])
        self.assertEqual(['octopi', 'dotfiles'], [r.name for r in Repository.all(User(login='fcoury'))])

    def test_find_validates_before_request(self):
        with self.assertRaises(ValidationError):
            Repository.find(user='fcoury', name='oct opi')

        with self.assertRaises(ValidationError):
            Repository.find(user='fcoury', color='blue')

        with self.assertRaises(ValidationError):
            Repository.find('fcoury')

        with self.assertRaises(ValidationError):
            Repository.find(name='octopi')

        self.assertRequests([])

    def test_find_all(self):
        self.respond('/repos/search/github%20api', {'repositories': [repository_record('fcoury', 'octopi')]})

        self.assertEqual(['octopi'], [r.name for r in Repository.find_all('github api')])

    def test_tags(self):
        self.respond('/repos/show/fcoury/octopi/tags', {'tags': {'v0.1': 'abc'}})

        repository = Repository(owner='fcoury', name='octopi')

        self.assertEqual([], self.api.requests)
        self.assertEqual([Tag(name='v0.1', hash='abc')], repository.tags())

    def test_create_read_only(self):
        with self.assertRaises(AuthenticationRequiredError):
            Repository.create('fcoury', 'octopi')

        self.assertRequests([])


class AuthenticatedRepositoryTestCase(BaseTestCase):

    def create_api(self):
        return FakeApi(login='fcoury', token='secret')

    def test_create(self):
        self.respond('/repos/create', {'repository': repository_record('fcoury', 'octopi', description='New')})

        repository = Repository.create(User(login='fcoury'), 'octopi', description='New')

        self.assertEqual('octopi', repository.name)
        self.assertEqual('New', repository.description)

        method, path, kwargs = self.api.requests[0]
        self.assertEqual(('POST', '/repos/create'), (method, path))
        self.assertEqual({'name': 'octopi', 'description': 'New', 'login': 'fcoury', 'token': 'secret'},
                         kwargs['data'])

    def test_create_for_other_owner(self):
        with self.assertRaises(AuthenticationRequiredError) as cx:
            Repository.create(User(login='joe'), 'octopi')

        self.assertEqual('To create a repository for joe, you must be authenticated', str(cx.exception))
        self.assertRequests([])

    def test_create_validates_before_request(self):
        with self.assertRaises(ValidationError):
            Repository.create('fcoury', 'octo pi')

        self.assertRequests([])
