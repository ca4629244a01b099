import collections

## API calls
Request = collections.namedtuple('Request', 'method, path, body, params, headers')
Request.__new__.__defaults__ = (None, None, None)
