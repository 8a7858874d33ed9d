"""Installation script."""
import setuptools
# inline:
# from hoa2pg.logic import lexyacc


PACKAGE_NAME = 'hoa2pg'
DESCRIPTION = (
    'Translate parity automata in extended HOA format '
    'to parity games for reactive synthesis.')
README = 'README.md'
VERSION_FILE = f'{PACKAGE_NAME}/_version.py'
MAJOR = 0
MINOR = 1
MICRO = 0
VERSION = f'{MAJOR}.{MINOR}.{MICRO}'
VERSION_FILE_TEXT = (
    '# This file was generated from setup.py\n'
    "version = '{version}'\n")
PYTHON_REQUIRES = '>=3.11'
INSTALL_REQUIRES = [
    'astutils >= 0.0.5',
    'networkx >= 2.0',
    'ply >= 3.6, <= 3.10']
TESTS_REQUIRE = ['pytest >= 4.6.11']
CLASSIFIERS = [
    'Development Status :: 2 - Pre-Alpha',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: BSD License',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Scientific/Engineering']
KEYWORDS = [
    'automaton', 'automata', 'omega-automata',
    'hoa', 'hanoi omega-automata format',
    'parity', 'parity game', 'pgsolver',
    'games', 'synthesis', 'reactive synthesis',
    'controller', 'specification']


def run_setup():
    """Build parser, write version, install."""
    s = VERSION_FILE_TEXT.format(version=VERSION)
    with open(VERSION_FILE, 'w') as f:
        f.write(s)
    _build_parser()
    with open(README) as fd:
        long_description = fd.read()
    setuptools.setup(
        name=PACKAGE_NAME,
        version=VERSION,
        description=DESCRIPTION,
        long_description=long_description,
        long_description_content_type='text/markdown',
        license='BSD',
        python_requires=PYTHON_REQUIRES,
        install_requires=INSTALL_REQUIRES,
        tests_require=TESTS_REQUIRE,
        extras_require={'test': TESTS_REQUIRE},
        packages=[
            PACKAGE_NAME,
            'hoa2pg.games',
            'hoa2pg.logic'],
        package_dir={PACKAGE_NAME: PACKAGE_NAME},
        entry_points={
            'console_scripts': ['hoa2pg = hoa2pg.__main__:run']},
        classifiers=CLASSIFIERS,
        keywords=KEYWORDS)


def _build_parser():
    """Cache the parser's LALR(1) state machine."""
    try:
        import astutils
        import networkx
        import ply
    except ImportError:
        print(
            'WARNING: `hoa2pg` could not cache '
            'parser tables (this message can '
            'be ignored if running only for '
            '"egg_info").')
        return
    from hoa2pg.logic import lexyacc
    lexyacc._rewrite_tables(
        outputdir='./hoa2pg/logic/')


if __name__ == '__main__':
    run_setup()
