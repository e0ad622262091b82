from setuptools import setup, find_packages
import re

# Read version from payroll/__init__.py
with open('payroll/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='payroll-ledger',
    version=version,
    packages=find_packages(include=['payroll', 'payroll.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'payroll=payroll.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Employee, leave and monthly payroll tracking for small organizations.',
    python_requires='>=3.10',
)
