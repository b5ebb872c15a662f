from setuptools import setup, find_packages

setup(
    name='edgex_north',
    version='1.0.0',
    description='EdgeX north: export telemetry readings to the EdgeX core-data REST API',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(include=['edgex_north', 'edgex_north.*']),
    install_requires=[         # Add dependencies from requirements.txt
        line.strip() for line in open('requirements.txt').readlines() if line.strip()
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8,<3.14',
    license='Apache-2.0'
)
