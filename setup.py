import setuptools
from setuptools import setup

import PGARB


#### Get/Set info to be passed into setup() ####
with open("README.md", "r") as fh:
    long_description = fh.read()

with open("requirements.txt") as reqFile:
    install_reqs = [ line.strip() for line in reqFile.readlines() if line.strip() != "" and not line.startswith("#") ]

setup(
    name='PGARB',
    version=PGARB.__version__,
    description="Rigid body motion simulation using projective geometric algebra",
    install_requires=install_reqs,
    extras_require={
        'test': [ 'pytest' ],
    },
    license='MIT',
    long_description = long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=[ "test", "test.*", ]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    package_data={ 'PGARB': [ 'Examples/Simulations/*.pgarb' ] },
    include_package_data=True,

    python_requires='>=3.6',

    zip_safe=False,

    entry_points={
        'console_scripts': [
            'pgarb = PGARB.Main:main' ]
    }
)
