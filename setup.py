from pathlib import Path
from setuptools import setup
import toml


version = Path('VERSION').read_text().strip()
readme  = Path('README.md').read_text()

pipfile = toml.loads(Path('Pipfile').read_text())

requirements = []

for k, v in pipfile["packages"].items():
    package = k
    if v.startswith('==') or v.startswith('>='):
        package = f"{k}{v}"
    requirements.append(package)


setup(name='gcp-vpc',
    version=version,
    description='Pulumi program declaring a Google Cloud VPC with custom subnets and firewall rules',
    long_description=readme,
    long_description_content_type="text/markdown",
    license='Apache',
    keywords="infrastructure-as-code gcp vpc pulumi",
    packages=['vpcstack'],
    python_requires='>=3.8',
    platforms=['any'],
    install_requires=requirements,
    extras_require={
        'test': ['nose2'],
    },
    zip_safe=False,
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'Natural Language :: English',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: System :: Systems Administration'
    ],
    test_suite='nose2.collector.collector',
    tests_require=['nose2']
)
