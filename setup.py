"""Setup script for xtal_scatter package."""

from setuptools import setup, find_packages

setup(
    name='xtal_scatter',
    version='1.0',
    packages=find_packages(include=['xtal_scatter', 'xtal_scatter.*']),
    package_data={
        'xtal_scatter': ['config/defaults.yaml', 'data/materials.yaml'],
    },
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.9.0',
        'matplotlib>=3.3.0',
        'pyyaml>=5.4',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'xtal-scatter=xtal_scatter.cli:main',
        ],
    },
)
