"""
A MediaWiki API client that treats a page as text made of sections.

Read a page, look at its sections one by one, and save the whole page or
just one section back.

Requires the ``requests`` library.

http://www.mediawiki.org/

Installation
============

To install the development version::

    pip install -e .

Example Usage
=============

.. code-block:: python

    import wikimate

Get a page:

.. code-block:: python

    wp = wikimate.Wiki("https://en.wikipedia.org/w/api.php", "MyCoolBot/0.0.0")

    wp.login("MyCoolBot", password)

    sausages = wp.page("Sausages")

Create it if it doesn't exist:

.. code-block:: python

    if not sausages.exists():
        text = "Intro about '''sausages'''.\\n"
        text += "\\n== Meat ==\\nPork and beef.\\n"
        text += "\\n== Veggie ==\\nTofu.\\n"
        if not sausages.set_text(text, summary="Create initial page"):
            print(sausages.get_error())

Work with its sections:

.. code-block:: python

    print(sausages.get_num_sections())

    # position 0 is the intro, the text before the first heading
    intro = sausages.get_section(0)
    sausages.set_section(intro + "\\nMore about sausage variants.\\n", 0,
                         summary="Update intro section", minor=True)

    # sections can be named by their heading too
    meat = sausages.get_section("Meat", heading=True)

    for name, text in sausages.get_all_sections(
            keyed_by=wikimate.SectionList.BY_NAME).items():
        print(name, len(text))

    sausages.new_section("Vegan", "Seitan.\\n")

Methods that talk to the wiki return False when the wiki reports an error;
``get_error()`` then tells you what went wrong.

MIT Licensed.
"""

__version__ = '1.0.0'

GETINFO = False

from .wiki import Wiki
from .page import Page
from .file import File
from .sections import (Section, SectionIndex, SectionList, index_sections,
                       locate, render)
from .excs import (WikiError, TransportError, EditConflict, WikiWarning,
                   UnsupportedKeyMode)

__all__ = [
    'GETINFO',
    'WikiError',
    'TransportError',
    'EditConflict',
    'WikiWarning',
    'UnsupportedKeyMode',
    'Wiki',
    'Page',
    'File',
    'Section',
    'SectionIndex',
    'SectionList',
    'index_sections',
    'locate',
    'render',
]
