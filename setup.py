from os import path
from re import match, S
from setuptools import setup

with open(path.join('wikimate', '__init__.py'), 'r') as f:
    contents = f.read()
    longdesc = match('^"""(.*?)"""', contents, S).group(1)
    version = match(r'[\s\S]*__version__[^\'"]+[\'"]([^\'"]+)[\'"]', contents).group(1)
    del contents

setup(
    name="wikimate",
    version=version,
    description="A MediaWiki client that edits pages section by section.",
    long_description=longdesc,
    long_description_content_type='text/x-rst',
    license="MIT",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Internet :: WWW/HTTP :: Dynamic Content :: Wiki',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    keywords='mediawiki api requests wikitext sections',
    packages=["wikimate"],
    install_requires=['requests'],
    python_requires='>=3.6',
    extras_require={
        'test': ['pytest'],
    },
)
