"""Setup configuration for Chunk Splitter."""

from setuptools import setup, find_packages

setup(
    name='chunk-splitter',
    version='1.0.0',
    description='Bounded, overlapping text chunking with exact character offsets',
    author='Your Name',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.11',
    install_requires=[
        'python-dotenv==1.0.0',
        'PyYAML==6.0.1',
        'click==8.1.7',
    ],
    extras_require={
        'tokens': ['tiktoken>=0.5.2'],
        'test': ['pytest>=7.4'],
    },
    entry_points={
        'console_scripts': [
            'chunk-splitter=chunk_splitter.cli:cli',
        ],
    },
)
