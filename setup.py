from setuptools import setup, find_packages

setup(
    name='mwbckp',
    version='0.1',
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    install_requires=[
        'Click',
        'colorama',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points='''
        [console_scripts]
        mwbckp=mwbckp.commands:cli
    ''',
)
