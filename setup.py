from setuptools import setup, find_packages

setup(
    name='zipcli',
    version='0.1',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    python_requires='>=3.10',
    install_requires=[
        'Click>=8.2',
        'PyYAML',
        'pydantic>=2'
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-mock'
        ]
    },
    entry_points='''
        [console_scripts]
        zipcli=zipcli.cli:main
    ''',
)
