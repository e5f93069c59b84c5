from setuptools import setup, find_packages
import re

# Read version from stccalc/__init__.py
with open('stccalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='stccalc',
    version=version,
    packages=find_packages(include=['stccalc', 'stccalc.*']),
    package_data={
        'stccalc': ['config/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'stc-calc=stccalc.cli.__main__:main',
            'stc-calc-mcp=stccalc.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Sell-to-cover calculator for stock option exercises and RSU releases.',
    python_requires='>=3.10',
)
