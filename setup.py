"""
annoscore setup: annoscore is a library for scoring documents by
annotating the occurrences of a query word
"""

from setuptools import setup, find_packages
import glob
import os

REQS = [
    'frozendict',
    'joblib',
    'nltk >= 3.0.0',
    'pandas >= 0.17',
    'tabulate',
]


setup(name='annoscore',
      version='0.1',
      packages=find_packages(),
      scripts=[f for f in glob.glob('scripts/*') if not os.path.isdir(f)],
      install_requires=REQS,
      extras_require={'test': ['pytest']})
