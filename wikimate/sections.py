"""
wikimate.sections - Splitting wikitext into sections.

A page's text is cut at every heading line into a run of sections that
cover the whole text with no gaps. Section 0 is the intro, the text
before the first heading, and is always present even when empty.

Example use:

.. code-block:: python

    >>> text = "Hi\\n== Meat ==\\nham\\n=== Pork ===\\nbacon\\n"
    >>> index = index_sections(text)
    >>> list(index.by_name)
    ['intro', 'Meat', 'Pork']
    >>> render(text, locate(index, 'Meat'), heading=False)
    'ham\\n=== Pork ===\\nbacon\\n'
    >>> render(text, locate(index, 'Meat', subsections=False))
    '== Meat ==\\nham\\n'

Sections are located either by position (an int) or by their heading
title (a str). Titles that appear more than once get ``_2``, ``_3``, ...
appended in order of appearance so that every title key is unique.
"""
import re
from collections import namedtuple, OrderedDict
from enum import Enum
from .excs import UnsupportedKeyMode

__all__ = [
    'Section',
    'SectionIndex',
    'SectionList',
    'index_sections',
    'locate',
    'render',
    'section_keys',
]

# A run of 1-6 '=', the title, the same run, optional trailing blanks, end
# of line. The title may neither start nor end with '=' so that unbalanced
# runs like "===Title==" are not headings.
HEADING = re.compile(r'^(={1,6})(?!=)(.+?)(?<!=)\1[^\S\n]*$', re.M)

INTRO = 'intro'

Section = namedtuple('Section', 'offset length depth')
Section.__doc__ = """A span of page text.

``offset`` and ``length`` count characters; ``depth`` is the heading
level (1-6), or 0 for the intro.
"""

class SectionList(Enum):
    """How a listing of all sections is keyed."""
    BY_INDEX = 'index'
    BY_NAME = 'name'

class SectionIndex(object):
    """Every section of one text, by position and by unique title.

    ``by_index`` is a list of Sections in text order; ``by_name`` maps
    each unique title (``'intro'`` for section 0) to the same Section
    objects, in the same order.
    """
    def __init__(self, by_index=None, by_name=None):
        self.by_index = by_index if by_index is not None else []
        self.by_name = by_name if by_name is not None else OrderedDict()

    def __repr__(self):
        """Represent a section index."""
        return '<SectionIndex {names}>'.format(names=list(self.by_name))

    __str__ = __repr__

    def __len__(self):
        return len(self.by_index)

    def __eq__(self, other):
        """Check if two indexes describe the same sections."""
        return (self.by_index == other.by_index
                and list(self.by_name.items()) == list(other.by_name.items()))

    def position(self, name):
        """Return the position of the section titled ``name``,
        or None if there is no such section.
        """
        section = self.by_name.get(name)
        if section is None:
            return None
        for position, other in enumerate(self.by_index):
            if other is section:
                return position
        return None

def _unique(names, name):
    """Append _2, _3, ... to ``name`` until it is not a key of ``names``."""
    if name not in names:
        return name
    count = 2
    while '{}_{}'.format(name, count) in names:
        count += 1
    return '{}_{}'.format(name, count)

def index_sections(text):
    """Parse ``text`` into a SectionIndex."""
    index = SectionIndex()
    offset, depth, name = 0, 0, INTRO

    def close(end):
        section = Section(offset, end - offset, depth)
        index.by_index.append(section)
        index.by_name[_unique(index.by_name, name)] = section

    for match in HEADING.finditer(text):
        close(match.start())
        offset = match.start()
        depth = len(match.group(1))
        name = match.group(0).replace('=', '').strip()
    close(len(text))
    return index

def locate(index, ref, subsections=True):
    """Find the span of section ``ref`` (a position or a title).

    If ``subsections`` is true, the span grows to take in every following
    section that is nested deeper than this one. The intro never has
    subsections.

    Return None if there is no such section. True and False are not
    positions.
    """
    if isinstance(ref, int) and not isinstance(ref, bool):
        if not 0 <= ref < len(index.by_index):
            return None
        section = index.by_index[ref]
    else:
        section = index.by_name.get(ref)
        if section is None:
            return None
    if not subsections or section.depth == 0:
        return section

    length = section.length
    records = iter(index.by_name.values())
    for record in records:
        if record.offset == section.offset and record.depth == section.depth:
            break
    for record in records:
        if record.depth <= section.depth:
            break
        length += record.length
    return section._replace(length=length)

def render(text, span, heading=True):
    """Cut the text of ``span`` out of ``text``.

    If ``heading`` is false, drop the heading line. A span that is only a
    heading with no line break after it renders as ''.
    """
    chunk = text[span.offset:span.offset + span.length]
    if heading or span.depth == 0:
        return chunk
    newline = chunk.find('\n')
    if newline < 0:
        return ''
    return chunk[newline + 1:]

def section_keys(index, mode):
    """List the keys of ``index`` for the key mode ``mode`` (a SectionList
    or its value), in text order.

    Raises UnsupportedKeyMode for anything else.
    """
    try:
        mode = SectionList(mode)
    except ValueError:
        raise UnsupportedKeyMode(
            'Unknown section key mode: {!r}'.format(mode)) from None
    if mode is SectionList.BY_INDEX:
        return list(range(len(index.by_index)))
    return list(index.by_name)
