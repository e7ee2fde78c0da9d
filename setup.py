"""
listenability setup: listenability is a library for analysing how well
texts can be listened to, and for keeping those analyses aligned with a
text while it is being edited
"""

from setuptools import setup, find_packages

REQS = [
    'nltk >= 3.0.0',
    'numpy',
    'tabulate',
]


setup(name='listenability',
      version='0.3',
      packages=find_packages(),
      install_requires=REQS,
      extras_require={'test': ['pytest']},
      entry_points={
          'console_scripts': [
              'listenability = listenability.cmd.main:main',
          ],
      })
