from setuptools import setup

VERSION = '0.1.0'
BASE_CVS_URL = 'http://github.com/daedalus/xxBloomFilter'

setup(
    name='xxBloomFilter',
    packages=['xxBloomFilter', 'xxBloomFilter.lib', ],
    version=VERSION,
    author='Dario Clavijo',
    author_email='dclavijo@protonmail.com',
    install_requires=[x.strip() for x in open('requirements.txt').readlines()],
    extras_require={'test': [x.strip() for x in open('requirements_test.txt').readlines()]},
    url=BASE_CVS_URL,
    download_url='{}/tarball/{}'.format(BASE_CVS_URL, VERSION),
    python_requires='>=3.7',
    entry_points={
        'console_scripts': [
            'mkbloom=xxBloomFilter.mkbloom:main',
            'loadbloom=xxBloomFilter.loadbloom:main',
        ],
    },
    keywords=['bloom filter', 'xxhash', 'probabilistic'],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: GNU General Public License (GPL)",
    ],
    description=("A fast probabilistic bloom filter with two seeded XXHash64 functions and portable state"),
    long_description=open('README.md', 'r').read(),
    long_description_content_type="text/markdown",
)
