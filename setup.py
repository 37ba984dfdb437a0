# -*- coding: utf-8 -*-
import codecs
from setuptools import setup, find_packages


tests_require = [
    'pytest>=7.0',
]

setup(
    name='Octopotion',
    version='0.1.0',
    packages=find_packages(exclude=['*tests*']),
    license='MIT',
    description='Typed, declarative resources for the GitHub v2 REST API',
    long_description=codecs.open('README.rst', encoding='utf-8').read(),
    python_requires='>=3.7',
    tests_require=tests_require,
    install_requires=[
        'requests>=2.20',
        'werkzeug>=2.0',
        'jsonschema>=3.0',
        'aniso8601>=0.84',
        'blinker>=1.3',
        'rfc3987',
        'strict-rfc3339'
    ],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
    zip_safe=False,
    extras_require={
        'tests': tests_require,
    }
)
