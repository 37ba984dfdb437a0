import logging
import os

from octopotion import Api, User, Tag

logging.basicConfig(level=logging.DEBUG)

api = Api(login=os.environ.get('GITHUB_LOGIN'),
          token=os.environ.get('GITHUB_TOKEN'),
          config={'OCTOPOTION_CACHE': True})
api.add_resources()

if __name__ == '__main__':
    user = User.find('fcoury')
    print(user.login, user.followers_count, user.plan and user.plan.name)

    for repository in user.repositories():
        print(repository, repository.watchers)

    print(user.followers())

    for tag in Tag.all(user='fcoury', repo='octopi'):
        print(tag.name, tag.hash)

    if not api.read_only:
        print(user.keys().titles)
