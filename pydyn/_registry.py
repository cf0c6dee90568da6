from .server.registrants import filetype, omnifunc, trigger

assert filetype
assert omnifunc
assert trigger

____ = None
