"""
See the Wiki docstrings.
"""
import logging
from warnings import warn as _warn
import requests
from .page import Page
from .file import File
from .excs import WikiError, TransportError, WikiWarning
from .misc import Meta, _CachedAttribute

logger = logging.getLogger(__name__)

_SECRET = ('token', 'lgtoken', 'lgpassword', 'password')

def _redact(data):
    """Return a copy of `data` fit for the log: every dict value whose key
    is a secret or ends in 'token' is masked, at any depth.
    """
    if isinstance(data, dict):
        return {
            key: ('***' if key in _SECRET or str(key).endswith('token')
                  else _redact(value))
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [_redact(item) for item in data]
    return data

class Wiki(object):
    """The base class for a wiki. Hands out Pages and Files, and carries
    out the requests they make.
    """

    def __init__(self, api_url, user_agent=None):
        """Initialize a wiki with its API URL.

        Additionally create a Meta instance.

        If user_agent is specified, all requests will use that user agent.
        Otherwise, a generic user agent is used.
        """
        self.api_url = api_url
        if user_agent is not None:
            self.user_agent = user_agent
        else:
            self.user_agent = "wikimate/1.0.0, python-requests/{}".format(
                requests.__version__)
        self.meta = Meta(self)
        self._session = requests.session()
        self.currentuser = None

    def __repr__(self):
        """Represent a Wiki object."""
        return "<Wiki at {addr}>".format(addr=self.api_url)

    def __eq__(self, other):
        """Check if two Wikis are equal."""
        return self.api_url == other.api_url

    def __hash__(self):
        """Wiki.__hash__() <==> hash(Wiki)"""
        return hash(self.api_url)

    __str__ = __repr__

    @_CachedAttribute
    def wiki_url(self):
        """The server URL the wiki reports for itself."""
        return self.meta.siteinfo()['server']

    def request(self, _headers=None, _post=False, files=None, **params):
        """Inner request method.

        Remains public since it might be used per se.

        Parameters set to None or False are left out and True is sent as
        1, since the API treats any present boolean parameter as true.
        Raises a WikiError subclass named after the code of an API error,
        or TransportError if no usable response came back.
        """
        for key, value in tuple(params.items()):
            if value is None or value is False:
                del params[key]
            elif value is True:
                params[key] = 1
        params["format"] = "json"
        logger.debug('%s %s', 'POST' if _post else 'GET', _redact(params))

        headers = {
            "User-Agent": self.user_agent,
        }
        headers.update(_headers if _headers is not None else {})

        try:
            if _post:
                response = self._session.post(self.api_url, data=params,
                                              headers=headers, files=files)
            else:
                response = self._session.get(self.api_url, params=params,
                                             headers=headers)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as exc:
            raise TransportError(str(exc)) from exc
        except ValueError as exc:
            raise TransportError('Response was not JSON: ' + str(exc)) from exc

        logger.debug('response: %s', _redact(data))

        if 'error' in data:
            error = dict(data['error'])
            code = error.pop('code', 'unknownerror')
            info = error.pop('info', '')
            error.pop('*', None)
            raise getattr(WikiError, code)(info, **error)

        if 'warnings' in data:
            warnings = data['warnings']
            for module, value in warnings.items():
                _warn('warning from {} module: {}'.format(
                    module,
                    value.get('*', value)
                ), getattr(WikiWarning, module))

        return data

    def post_request(self, **params):
        """Alias for Wiki.request(_post=True)"""
        return self.request(_post=True, **params)

    def _write(self, action, params, files=None):
        """POST a token-bearing action, fetching a fresh token once
        if the cached one has gone stale.
        """
        params['action'] = action
        params['token'] = self.meta.csrftoken
        try:
            return self.post_request(files=files, **params)
        except WikiError.badtoken:
            del self.meta.csrftoken
            params['token'] = self.meta.csrftoken
            return self.post_request(files=files, **params)

    def query(self, **params):
        """Make an ``action=query`` request."""
        params['action'] = 'query'
        return self.request(**params)

    def edit(self, **params):
        """Make an ``action=edit`` request.

        See https://www.mediawiki.org/wiki/API:Edit for the parameters.
        """
        return self._write('edit', params)

    def delete(self, **params):
        """Make an ``action=delete`` request."""
        return self._write('delete', params)

    def upload(self, fileobj_or_url, filename,
               comment=None, ignorewarnings=None, **evil):
        """Upload a file.

        `fileobj_or_url` must be a file(-like) object open in BYTES mode or
        a canonical URL to a file to upload.
        `filename` is the target filename (including extension).
        `comment` is the upload comment, and is also the initial
        content for the file description page unless `text` is given.
        """
        params = {
            'filename': filename,
            'comment': comment,
            'ignorewarnings': ignorewarnings
        }
        params.update(evil)
        if isinstance(fileobj_or_url, str):
            params['url'] = fileobj_or_url
            return self._write('upload', params)
        files = {'file': (filename, fileobj_or_url)}
        return self._write('upload', params, files)

    def login(self, username, password):
        """Login with a username and password; store cookies.

        Returns the ``login`` part of the response; its ``result`` is
        ``'Success'`` if it worked.
        """
        lgtoken = self.meta.tokens('login')
        params = {
            'action': 'login',
            'lgname': username,
            'lgpassword': password,
            'lgtoken': lgtoken
        }
        data = self.post_request(**params)['login']
        if data.get('result') == 'Success':
            self.currentuser = data.get('lgusername', username)
            logger.info('Logged in to %s as %s', self.api_url,
                        self.currentuser)
        else:
            logger.warning('Login to %s as %s failed: %s', self.api_url,
                           username, data.get('reason', data.get('result')))
        # tokens belong to the old session
        self.meta.__dict__.pop('csrftoken', None)
        return data

    def logout(self):
        """Log out the current user."""
        data = self._write('logout', {})
        self.currentuser = None
        self.meta.__dict__.pop('csrftoken', None)
        return data

    def page(self, title, **evil):
        """Return a Page instance based off of the title of the page."""
        if isinstance(title, Page):
            return title
        return Page(self, title=title, **evil)

    def file(self, name, **evil):
        """Return a File instance based off of the file name, with or
        without the ``File:`` prefix.
        """
        if isinstance(name, File):
            return name
        return File(self, name=name, **evil)
