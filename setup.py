from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'pymongo>=4.0',
    'coloredlogs>=15.0',
    'sanic>=22.12',
]

test_requirements = [
    'sanic-testing>=22.12',
    'pytest',
]

setup(
    name='nftledger',
    version=__version__,
    description='Non-fungible token registry: ownership ledger, delegated approvals and atomic transfers.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.8',
    zip_safe=True,
    include_package_data=True,
)
