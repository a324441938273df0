#!/usr/bin/env python
"""Setuptools distribution file."""
import os
from setuptools import setup


def _get_here(fname):
    return os.path.join(os.path.dirname(__file__), fname)


def _get_long_description(fname, encoding='utf8'):
    with open(fname, 'r', encoding=encoding) as fin:
        return fin.read()


setup(name='minitelnet',
      version='0.1.0',
      license='ISC',
      description="Blocking Telnet endpoint for scripted line exchange",
      long_description=_get_long_description(fname=_get_here('README.rst')),
      long_description_content_type='text/x-rst',
      packages=['minitelnet'],
      package_data={'': ['README.rst'], },
      python_requires='>=3.8',
      install_requires=['wcwidth>=0.3.0'],
      extras_require={
          'test': ['pytest>=7.0'],
      },
      entry_points={
         'console_scripts': [
             'minitelnet-client = minitelnet.client:main',
         ]},
      platforms='any',
      zip_safe=True,
      keywords=', '.join(('telnet', 'client', 'automation', 'mud',
                          'negotiation', 'scripting')),
      classifiers=['License :: OSI Approved :: ISC License (ISCL)',
                   'Programming Language :: Python :: 3',
                   'Intended Audience :: Developers',
                   'Development Status :: 4 - Beta',
                   'Topic :: System :: Networking',
                   'Topic :: Terminals :: Telnet',
                   'Topic :: Internet',
                   ],
      )
