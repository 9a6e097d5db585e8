from setuptools import setup

with open('README.rst', 'r') as fh:
    long_description = fh.read()

# The lines below are parsed by `docs/conf.py`.
name = 'oprf'
version = '0.1.0'

setup(
    name=name,
    version=version,
    packages=[name,],
    package_dir={'': 'src'},
    python_requires='>=3.7',
    install_requires=[
        'parts~=1.3',
        'fe25519~=1.2',
        'ge25519~=1.2'
    ],
    extras_require={
        'rbcl': [
            'rbcl~=0.2'
        ],
        'docs': [
            'sphinx~=4.2.0',
            'sphinx-rtd-theme~=1.0.0'
        ],
        'test': [
            'fountains~=1.3',
            'bitlist~=0.7',
            'pytest~=7.0',
            'pytest-cov~=3.0'
        ],
        'lint': [
            'pylint~=2.14.0'
        ],
        'coveralls': [
            'coveralls~=3.3.1'
        ],
        'publish': [
            'setuptools~=62.0',
            'wheel~=0.37',
            'twine~=4.0'
        ]
    },
    license='MIT',
    description='Python library implementing a two-party oblivious ' + \
                'pseudorandom function (OPRF) over the ristretto255 ' + \
                'prime-order group.',
    long_description=long_description,
    long_description_content_type='text/x-rst',
)
