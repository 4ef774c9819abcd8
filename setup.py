from setuptools import setup, find_namespace_packages
import re
from pathlib import Path

_version_re = re.compile(r"^__version__\s*(?::\s*[\w\[\]]+)?\s*=\s*['\"]([^'\"]+)['\"]", re.M)


def file_getVersion(rel_path: str) -> str:
    """
    Retrieve the version string from the specified file.
    """
    version_file = Path(rel_path)
    if not version_file.exists():
        raise RuntimeError(f"Version file {rel_path} not found.")

    with open(version_file, 'r') as f:
        content = f.read()
        match = _version_re.search(content)
        if not match:
            raise RuntimeError(f"Could not find __version__ in {rel_path}")
        return match.group(1)


setup(
    name='pricetoken',
    version=file_getVersion('pricetoken/pltokens.py'),
    description='Render live price tokens in authored content',
    author='FNNDSC',
    author_email='rudolph.pienaar@childrens.harvard.edu',
    url='https://github.com/FNNDSC/pl-pricetoken',
    packages=find_namespace_packages(include=['pricetoken', 'pricetoken.*']),
    python_requires='>=3.11',
    install_requires=[
        'chris_plugin',
        'click',
        'loguru',
        'pydantic>=2',
        'pydantic-settings',
        'rich',
    ],
    license='MIT',
    entry_points={
        'console_scripts': [
            'pricetoken = pricetoken.pltokens:main',
            'pricetoken-cli = pricetoken.commands.app:cli',
        ]
    },
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Text Processing :: General',
    ],
    extras_require={
        'none': [],
        'test': [
            'pytest>=7.1'
        ],
        'dev': [
            'pytest>=7.1'
        ]
    }
)
