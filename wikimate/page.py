"""
This submodule contains the Page object.
"""
# pylint: disable=too-many-instance-attributes
import logging
import re
from collections import OrderedDict
from .excs import WikiError, error_record
from .sections import (SectionIndex, SectionList, index_sections, locate,
                       render, section_keys)

__all__ = [
    'Page',
]

logger = logging.getLogger(__name__)

CATEGORY = re.compile(r'\[\[\s*Category\s*:\s*([^\]|]+?)\s*(?:\|[^\]]*)?\]\]',
                      re.I)
# a category link together with the rest of its line, if that is blank
CATEGORY_LINK = re.compile(CATEGORY.pattern + r"[^\S\n]*\n?", re.I)

class Page(object):
    """The class for a page on a wiki.

    Must be initialized with a Wiki instance.

    The page's text and its sections are fetched on first use (or at once
    if `getinfo` is true) and kept until ``refresh`` is called or the page
    is edited through this object.

    Methods that talk to the wiki do not raise for errors the wiki reports;
    they return False and keep the error for ``get_error``.

    Pages that do not exist evaluate to False.
    """
    #pylint: disable=too-many-arguments
    def __init__(self, wiki, title=None, getinfo=None, **data):
        """Initialize a page with its wiki and title.

        If `getinfo` is True, fetch the page at once.
        If `getinfo` is None, use the module default (defined by GETINFO)
        """
        self.wiki = wiki
        self.title = title
        self.text = None
        self.sections = SectionIndex()
        self.invalid = False
        self.error = None
        self.basetimestamp = None
        self.starttimestamp = None
        self._exists = False
        self.__dict__.update(data)
        if getinfo is None:
            from . import GETINFO
            getinfo = GETINFO
        if getinfo:
            self.refresh()

    def __bool__(self):
        """Return the boolean state of a page. This will simply be whether
        the page exists.
        """
        return self.exists()

    def __repr__(self):
        """Represent a page instance."""
        return "<Page {name}>".format(name=self.title)

    def __eq__(self, other):
        """Check if two pages are the same."""
        return self.title == other.title

    def __hash__(self):
        """Page.__hash__() <==> hash(Page)"""
        return hash(self.title)

    __str__ = __repr__

    def _fail(self, exc):
        """Record a caught WikiError as the last error."""
        self.error = error_record(exc)
        logger.warning('%s failed on %s: %s', exc.code, self.title, exc.info)
        return False

    def _load(self, text):
        """Replace the text and re-split it into sections."""
        self.text = text
        self.sections = index_sections(text)

    def _ensure(self):
        """Fetch the page if it has never been fetched."""
        if self.text is None and not self.invalid:
            self.refresh()

    def refresh(self):
        """Fetch the page's state and text from the wiki.

        A page that does not exist yet gets empty text. If the wiki
        rejects the title, ``invalid`` is set and the page should not be
        used any further.

        Returns True on success.
        """
        self.error = None
        try:
            data = self.wiki.query(**{
                'titles': self.title,
                'prop': 'info|revisions',
                'rvprop': 'content|timestamp',
                'rvslots': 'main',
                'curtimestamp': True,
            })
        except WikiError as exc:
            return self._fail(exc)

        pages = data.get('query', {}).get('pages')
        page_data = tuple(pages.values())[0] if pages else {'invalid': ''}
        if 'invalid' in page_data:
            self.invalid = True
            self._exists = False
            self._load('')
            self.error = {
                'code': 'invalidtitle',
                'info': page_data.get('invalidreason',
                                      'The title is not valid.'),
            }
            logger.warning('Invalid title %r: %s', self.title,
                           self.error['info'])
            return False

        self.title = page_data.get('title', self.title)
        self.starttimestamp = data.get('curtimestamp')
        if 'missing' in page_data:
            self._exists = False
            self.basetimestamp = None
            self._load('')
        else:
            rev = page_data['revisions'][0]
            self._exists = True
            self.pageid = page_data.get('pageid')
            self.basetimestamp = rev.get('timestamp')
            self._load(rev['slots']['main']['*'])
        logger.debug('Fetched %s: %d sections', self.title,
                     len(self.sections))
        return True

    def get_title(self):
        """Return the title of the page."""
        return self.title

    def exists(self):
        """Return whether the page exists on the wiki."""
        self._ensure()
        return self._exists

    def get_error(self):
        """Return the last error as a dict with at least ``code`` and
        ``info`` keys, or None if the last call succeeded.
        """
        return self.error

    def get_text(self, refresh=False):
        """Return the page's text ('' for a missing page), fetching it
        first if needed or if `refresh` is true.
        """
        if refresh:
            self.refresh()
        else:
            self._ensure()
        return self.text

    def get_num_sections(self):
        """Return the number of sections, counting the intro."""
        self._ensure()
        return len(self.sections)

    def get_section_offsets(self):
        """Return an OrderedDict of section title to Section
        (offset, length, depth).
        """
        self._ensure()
        return OrderedDict(self.sections.by_name)

    def get_section(self, section, heading=False, subsections=True):
        """Return the text of one section.

        `section` is the position (0 is the intro) or the title of the
        section. If `heading` is true, keep the heading line. If
        `subsections` is true, include the sections nested under it.

        Returns None if there is no such section.
        """
        self._ensure()
        span = locate(self.sections, section, subsections)
        if span is None:
            return None
        return render(self.text, span, heading)

    def get_all_sections(self, heading=False, keyed_by=SectionList.BY_INDEX,
                         subsections=False):
        """Return an OrderedDict of every section's text, in page order.

        `keyed_by` is a SectionList member: BY_INDEX keys the dict by
        position, BY_NAME by unique title. Anything else raises
        UnsupportedKeyMode.

        Unlike ``get_section``, `subsections` defaults to False here: each
        section is rendered on its own, so the BY_INDEX values taken with
        their headings join back into the page's text.
        """
        self._ensure()
        keys = section_keys(self.sections, keyed_by)
        return OrderedDict(
            (key, self.get_section(key, heading, subsections))
            for key in keys
        )

    def get_categories(self):
        """Return the names of the categories the page's text puts it in."""
        self._ensure()
        return [match.group(1) for match in CATEGORY.finditer(self.text or '')]

    def set_categories(self, categories, summary=None):
        """Put the page in exactly the given categories.

        Every category link is taken out of the text and one link per name
        is written at the end of the page. An empty list takes the page out
        of all its categories.

        Returns True on success.
        """
        content = self.get_text(refresh=True)
        if content is None:
            return False
        if summary is None:
            summary = "Automated edit: Set categories"
        return self._save_categories(content, categories, summary)

    def add_categories(self, categories, summary=None):
        """Put the page in the given categories as well as the ones it is
        already in.

        Returns True on success.
        """
        content = self.get_text(refresh=True)
        if content is None:
            return False
        if summary is None:
            summary = "Automated edit: Add categories"
        current = [match.group(1) for match in CATEGORY.finditer(content)]
        return self._save_categories(content, current + list(categories),
                                     summary)

    def _save_categories(self, content, categories, summary):
        """Rewrite the category links of `content` and save it."""
        names = []
        for name in categories:
            name = name.strip()
            if name and name not in names:
                names.append(name)
        content = CATEGORY_LINK.sub('', content).rstrip()
        lines = [content] if content else []
        lines.extend('[[Category:{}]]'.format(name) for name in names)
        return self.set_text('\n'.join(lines), summary=summary)

    def _resolve(self, section):
        """Turn a section title into its position; positions and 'new'
        are returned as they are. Returns None for an unknown title.
        """
        if isinstance(section, int) and not isinstance(section, bool):
            return section
        if section == 'new':
            return section
        return self.sections.position(section)

    def set_text(self, text, section=None, minor=False, summary=None,
                 **evil):
        """Save new text to the page.

        If `section` is None the whole page is replaced. Otherwise only
        that section is: a position, a title on the current page, or 'new'
        to add a section at the end.

        A page that exists is never re-created by this call, and a missing
        one is never overwritten by a concurrent creation. Other keyword
        arguments go to the edit request.

        Returns True if the wiki saved the edit. After a section edit the
        page is fetched again to pick up the merged text; if that fetch
        fails the edit still counts, ``get_error`` stays None, and the
        text is fetched on next use instead.
        """
        self._ensure()
        if self.text is None or self.invalid:
            return False
        self.error = None

        params = {
            'title': self.title,
            'text': text,
            'minor': minor,
            'summary': summary,
            'basetimestamp': self.basetimestamp,
            'starttimestamp': self.starttimestamp,
        }
        if self._exists:
            params['nocreate'] = True
        else:
            params['createonly'] = True
        if section is not None:
            params['section'] = self._resolve(section)
            if params['section'] is None:
                self.error = {
                    'code': 'sectionnotfound',
                    'info': "Section {!r} was not found on this page"
                            .format(section),
                }
                logger.info('%s: %s', self.title, self.error['info'])
                return False
        params.update(evil)

        try:
            data = self.wiki.edit(**params)
        except WikiError as exc:
            return self._fail(exc)
        result = data.get('edit', {})
        if result.get('result') != 'Success':
            self.error = dict(result, code='editfailure',
                              info='The edit was not saved.')
            logger.warning('Edit to %s not saved: %s', self.title, result)
            return False

        self._exists = True
        if 'newtimestamp' in result:
            self.basetimestamp = result['newtimestamp']
        if section is None:
            self._load(text)
        elif not self.refresh():
            # saved, but the merged text could not be read back
            self.error = None
            self.text = None
            self.sections = SectionIndex()
        return True

    def set_section(self, text, section=0, summary=None, minor=False,
                    **evil):
        """Save new text to one section of the page.
        See ``set_text``.
        """
        return self.set_text(text, section, minor, summary, **evil)

    def new_section(self, name, text):
        """Add a section titled `name` to the end of the page."""
        return self.set_section(text, 'new', sectiontitle=name)

    def delete(self, reason=None):
        """Delete this page. Note: this is NOT the same thing
        as `del page`! `del` only unsets names, not objects.

        Returns True on success.
        """
        self.error = None
        params = {'reason': reason}
        if getattr(self, 'pageid', None):
            params['pageid'] = self.pageid
        else:
            params['title'] = self.title
        try:
            self.wiki.delete(**params)
        except WikiError as exc:
            return self._fail(exc)
        self._exists = False
        self.basetimestamp = None
        return True

    def replace(self, old_text, new_text='', summary=None):
        """Replace each occurence of old_text in the page's source with
        new_text.

        Raises ValueError if old_text is empty.
        """

        if old_text and new_text:
            edit_summary = "Automated edit: Replace {} with {}".format(old_text, new_text)
        elif old_text:
            edit_summary = "Automated edit: Remove {}".format(old_text)
        else:
            raise ValueError("old_text cannot be empty.")

        if summary is not None:
            edit_summary = summary

        content = self.get_text(refresh=True)
        if content is None:
            return False
        return self.set_text(content.replace(old_text, new_text),
                             summary=edit_summary)

    def substitute(self, pattern, repl, flags=0, summary=None):
        """Use a regex to substitute each occurence of pattern in the page's
        source with repl.

        Can raise normal re errors.
        """

        if not repl:
            edit_summary = "Automated edit: Removed text"
        else:
            edit_summary = "Automated edit: Replaced text"

        if summary is not None:
            edit_summary = summary

        content = self.get_text(refresh=True)
        if content is None:
            return False
        return self.set_text(re.sub(pattern, repl, content, flags=flags),
                             summary=edit_summary)
