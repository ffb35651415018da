import os

import nox

NOXENV = os.environ.get('NOXENV')
PYTHONS = NOXENV or [
    '3.10',
    '3.11',
    '3.12',
]
PYTHON = NOXENV or PYTHONS[-1]


@nox.session(python=PYTHONS)
def test(session):
    session.install('-e', '.[test]')
    session.run(
        'pytest',
        '-Wall',
        '--cov',
        'libcountdown',
        '--cov-report',
        'term-missing',
    )


@nox.session(python=PYTHON)
def lint(session):
    session.install('-e', '.[lint]')
    session.run(
        'flake8',
        '--max-line-length',
        '100',
        'libcountdown',
        'noxfile.py',
        'test',
        'setup.py',
    )


@nox.session(python=PYTHON)
def format(session):
    session.install('-e', '.[lint]')
    session.run('isort', 'libcountdown', 'test')
