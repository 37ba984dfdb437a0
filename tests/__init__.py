from unittest import TestCase

from octopotion import Api
from octopotion.exceptions import TransportError


class FakeApi(Api):
    """
    An :class:`Api` that answers requests from ``responses``, a dictionary of path to decoded response, and records
    every request it receives. Paths without a response answer with HTTP 404; exception values are raised.
    """

    def __init__(self, responses=None, **kwargs):
        super(FakeApi, self).__init__(**kwargs)
        self.responses = dict(responses or {})
        self.requests = []

    def _request(self, method, path, **kwargs):
        self.requests.append((method, path, kwargs))

        try:
            response = self.responses[path]
        except KeyError:
            raise TransportError(404, path)

        if isinstance(response, Exception):
            raise response
        return response


class BaseTestCase(TestCase):

    def setUp(self):
        super(BaseTestCase, self).setUp()
        self.api = self.create_api()
        self.api.add_resources()

    def tearDown(self):
        self.api.close()
        super(BaseTestCase, self).tearDown()

    def create_api(self):
        return FakeApi()

    def respond(self, path, response):
        self.api.responses[path] = response

    @property
    def request_paths(self):
        return [path for method, path, kwargs in self.api.requests]

    def assertRequests(self, expected, msg=None):
        self.assertEqual(expected, self.request_paths, msg)


def user_record(login, **kwargs):
    record = {
        'id': 1,
        'login': login,
        'name': login.title(),
        'following_count': 1,
        'followers_count': 2,
        'public_repo_count': 3,
        'public_gist_count': 0,
        'created_at': '2009/03/19 14:00:06 -0700'
    }
    record.update(kwargs)
    return record


def repository_record(owner, name, **kwargs):
    record = {
        'name': name,
        'owner': owner,
        'description': 'A GitHub API client',
        'url': 'http://github.com/{}/{}'.format(owner, name),
        'fork': False,
        'private': False,
        'forks': 5,
        'watchers': 40,
        'open_issues': 2,
        'created_at': '2009/04/17 03:21:52 -0700',
        'pushed_at': '2009/07/06 08:25:28 -0700'
    }
    record.update(kwargs)
    return record
