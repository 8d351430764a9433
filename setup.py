"""Setup module"""

from setuptools import setup

setup(
    name='thompson',
    version='0.0.1',
    description="Regular expression compiler using Thompson's "
    "construction to build a nondeterministic finite automaton (NFA), "
    "and simulate it over input strings",
    install_requires=['numpy', 'networkx'],
    extras_require={
        "test": ["pytest"]
    },
    python_requires='>=3.12',
    license='None',
    package_dir={'': 'src'},
    packages=['thompson'],
    keywords=['regular expression', 'NFA', "Thompson's construction"])
