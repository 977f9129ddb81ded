"""
wikimate.excs - Exceptions and exception handling for API
requests.

To catch a permission error coming straight from the API:

..code-block:: python

    try:
        wiki.edit(title='Main Page', text='hi')
    except wikimate.WikiError.protectedpage as exc:
        print('Page is protected:', exc.info)

Page and File objects do not raise these for remote failures; they
record them instead:

..code-block:: python

    if not page.set_text('new text'):
        print(page.get_error()['code'])
"""
__all__ = [
    'WikiError',
    'TransportError',
    'EditConflict',
    'WikiWarning',
    'UnsupportedKeyMode',
    'error_record',
]

class _MetaGetattr(type):
    """Metaclass to provide __getattr__ on a class."""
    def __getattr__(cls, name):
        if name.startswith('__'):
            raise AttributeError(name)
        setattr(cls, name, type(name, (cls,), {}))
        return getattr(cls, name)

#pylint: disable=too-few-public-methods
class WikiError(Exception, metaclass=_MetaGetattr):
    """An error returned by the wiki's API. Raised by Wiki.request.

    ``WikiError.somecode`` is a subclass of WikiError created on first
    access, and Wiki.request raises that subclass for error code
    ``somecode``.
    """
    def __init__(self, info='', **payload):
        super().__init__(info)
        self.info = info
        self.payload = payload

    @property
    def code(self):
        """Return the error code."""
        return type(self).__name__

class TransportError(WikiError):
    """The HTTP exchange itself failed (connection, timeout, bad status)."""
    @property
    def code(self):
        return 'transport'

class EditConflict(WikiError):
    """The page was changed after the last content fetch.

    Raised by Wiki.request for the ``editconflict`` error code, so both
    ``except EditConflict`` and ``except WikiError`` catch it.
    """
    @property
    def code(self):
        return 'editconflict'

class UnsupportedKeyMode(ValueError):
    """A section listing was requested with an unknown key mode."""

class WikiWarning(UserWarning, metaclass=_MetaGetattr):
    """The API sent a warning in the response."""

def error_record(exc):
    """Turn a caught WikiError into the dict stored as an object's
    last error.
    """
    record = dict(exc.payload)
    record['code'] = exc.code
    record['info'] = exc.info
    return record

WikiError.editconflict = EditConflict
