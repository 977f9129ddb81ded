"""An in-memory stand-in for Wiki, answering the calls Page and File make."""
from wikimate.sections import index_sections, locate

CURTIMESTAMP = '2026-10-18T10:00:00Z'
REVTIMESTAMP = '2026-10-01T00:00:00Z'
NEWTIMESTAMP = '2026-10-18T10:05:00Z'

class FakeWiki(object):
    """Keeps page texts and file infos in dicts and records every call.

    Set ``fail`` to an exception to have the next write raise it, or
    ``query_fail`` for queries. Set ``result`` to change the edit result.
    """
    user_agent = 'Test suite'

    def __init__(self, pages=None, files=None):
        self.pages = dict(pages or {})
        self.files = dict(files or {})
        self.calls = []
        self.fail = None
        self.query_fail = None
        self.result = None

    def calls_to(self, action):
        """Return the params of every call to ``action``."""
        return [params for name, params in self.calls if name == action]

    def query(self, **params):
        self.calls.append(('query', params))
        if self.query_fail is not None:
            raise self.query_fail
        title = params['titles']
        if '<' in title:
            return {'query': {'pages': {'-1': {
                'title': title,
                'invalidreason': 'The requested page title contains '
                                 'invalid characters: "<".',
                'invalid': '',
            }}}}
        if params.get('prop') == 'imageinfo':
            page = {'pageid': 40, 'ns': 6, 'title': title}
            if title[len('File:'):] in self.files:
                page['imageinfo'] = [self.files[title[len('File:'):]]]
            return {'query': {'pages': {'40': page}}}
        if title not in self.pages:
            return {'curtimestamp': CURTIMESTAMP, 'query': {'pages': {'-1': {
                'ns': 0, 'title': title, 'missing': '',
            }}}}
        return {'curtimestamp': CURTIMESTAMP, 'query': {'pages': {'12': {
            'pageid': 12,
            'ns': 0,
            'title': title,
            'revisions': [{
                'timestamp': REVTIMESTAMP,
                'slots': {'main': {
                    'contentmodel': 'wikitext',
                    '*': self.pages[title],
                }},
            }],
        }}}}

    def edit(self, **params):
        self.calls.append(('edit', params))
        if self.fail is not None:
            raise self.fail
        if self.result is not None:
            return {'edit': self.result}
        title = params['title']
        section = params.get('section')
        if section is None:
            self.pages[title] = params['text']
        elif section == 'new':
            self.pages[title] = self.pages.get(title, '') + '\n== {} ==\n{}'.format(
                params['sectiontitle'], params['text'])
        else:
            old = self.pages[title]
            span = locate(index_sections(old), section)
            self.pages[title] = (old[:span.offset] + params['text']
                                 + old[span.offset + span.length:])
        return {'edit': {
            'result': 'Success',
            'pageid': 12,
            'title': title,
            'newtimestamp': NEWTIMESTAMP,
        }}

    def delete(self, **params):
        self.calls.append(('delete', params))
        if self.fail is not None:
            raise self.fail
        return {'delete': {'title': params.get('title'),
                           'reason': params.get('reason')}}

    def upload(self, fileobj_or_url, filename, **params):
        self.calls.append(('upload', dict(params, filename=filename)))
        if self.fail is not None:
            raise self.fail
        if self.result is not None:
            return {'upload': self.result}
        info = {'url': 'https://wiki.example/images/' + filename,
                'size': 3, 'mime': 'image/png', 'sha1': 'abc'}
        self.files[filename] = info
        return {'upload': {'result': 'Success', 'filename': filename,
                           'imageinfo': info}}
