"""
This submodule contains the File object, for files uploaded to a wiki.

Only the current version of a file is looked at; older versions are
not modelled.
"""
import logging
import requests
from .excs import WikiError, TransportError, error_record

__all__ = [
    'File',
]

logger = logging.getLogger(__name__)

class File(object):
    """A file on a wiki.

    Must be initialized with a Wiki instance. Like Page, remote failures
    are returned as False and kept for ``get_error``.
    """
    def __init__(self, wiki, name=None, getinfo=None, **data):
        """Initialize a file with its wiki and name (``File:`` is
        prepended to the title if missing).
        """
        self.wiki = wiki
        if name is not None and name.startswith('File:'):
            name = name[len('File:'):]
        self.name = name
        self.title = 'File:{}'.format(name)
        self.info = None
        self.invalid = False
        self.error = None
        self._exists = False
        self.__dict__.update(data)
        if getinfo is None:
            from . import GETINFO
            getinfo = GETINFO
        if getinfo:
            self.refresh()

    def __bool__(self):
        """Whether the file exists."""
        return self.exists()

    def __repr__(self):
        """Represent a file."""
        return "<File {name}>".format(name=self.name)

    __str__ = __repr__

    def __eq__(self, other):
        """Check if two files are the same."""
        return self.title == other.title

    def __hash__(self):
        """File.__hash__() <==> hash(File)"""
        return hash(self.title)

    def _fail(self, exc):
        """Record a caught WikiError as the last error."""
        self.error = error_record(exc)
        logger.warning('%s failed on %s: %s', exc.code, self.title, exc.info)
        return False

    def _ensure(self):
        """Fetch the file's info if it has never been fetched."""
        if self.info is None and not self.invalid:
            self.refresh()

    def refresh(self):
        """Fetch the current version's details from the wiki."""
        self.error = None
        try:
            data = self.wiki.query(**{
                'titles': self.title,
                'prop': 'imageinfo',
                'iiprop': 'url|size|mime|sha1|timestamp|user',
            })
        except WikiError as exc:
            return self._fail(exc)

        pages = data.get('query', {}).get('pages')
        page_data = tuple(pages.values())[0] if pages else {'invalid': ''}
        if 'invalid' in page_data:
            self.invalid = True
            self.error = {
                'code': 'invalidtitle',
                'info': page_data.get('invalidreason',
                                      'The title is not valid.'),
            }
            logger.warning('Invalid file title %r: %s', self.title,
                           self.error['info'])
            return False
        # a file page without an uploaded file has no imageinfo
        infos = page_data.get('imageinfo')
        self._exists = bool(infos)
        self.info = dict(infos[0]) if infos else {}
        return True

    def exists(self):
        """Return whether the file has been uploaded."""
        self._ensure()
        return self._exists

    def get_error(self):
        """Return the last error dict, or None."""
        return self.error

    def get_url(self):
        """Return the URL of the file, or None."""
        self._ensure()
        return (self.info or {}).get('url')

    def get_size(self):
        """Return the size of the file in bytes, or None."""
        self._ensure()
        return (self.info or {}).get('size')

    def get_mime(self):
        """Return the MIME type of the file, or None."""
        self._ensure()
        return (self.info or {}).get('mime')

    def get_sha1(self):
        """Return the SHA-1 hash of the file's contents, or None."""
        self._ensure()
        return (self.info or {}).get('sha1')

    def download(self):
        """Return the contents of the file as bytes, or None on failure."""
        url = self.get_url()
        if url is None:
            return None
        self.error = None
        try:
            # pylint: disable=protected-access
            response = self.wiki._session.get(
                url, headers={'User-Agent': self.wiki.user_agent})
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            self._fail(TransportError(str(exc)))
            return None
        return response.content

    def upload(self, fileobj_or_url, comment=None, text=None,
               overwrite=False):
        """Upload the file, from a file object open in bytes mode or a URL.

        `text` is the description page text for a new file. Uploading
        over an existing file needs `overwrite`.

        Returns True on success.
        """
        self.error = None
        try:
            data = self.wiki.upload(fileobj_or_url, self.name,
                                    comment=comment, text=text,
                                    ignorewarnings=overwrite)
        except WikiError as exc:
            return self._fail(exc)
        result = data.get('upload', {})
        if result.get('result') != 'Success':
            self.error = dict(result, code='uploadfailure',
                              info='The upload was not saved.')
            logger.warning('Upload of %s not saved: %s', self.title, result)
            return False
        self._exists = True
        if 'imageinfo' in result:
            self.info = dict(result['imageinfo'])
        else:
            self.info = None
        return True

    def delete(self, reason=None):
        """Delete the file and its description page."""
        self.error = None
        try:
            self.wiki.delete(title=self.title, reason=reason)
        except WikiError as exc:
            return self._fail(exc)
        self._exists = False
        self.info = {}
        return True
