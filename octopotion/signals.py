from blinker import Namespace

_octopotion = Namespace()

before_find = _octopotion.signal('before-find')

after_find = _octopotion.signal('after-find')

before_create = _octopotion.signal('before-create')

after_create = _octopotion.signal('after-create')
