from setuptools import setup, find_packages
setup(
    name='parameter-sync',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    description='Synchronize secrets from a local pass store into AWS SSM Parameter Store.',
    author='Your Name',
    author_email='youremail@example.com',
    python_requires='>=3.9',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'pydantic>=2.0.0',
        'cryptography>=41.0.0',
        'boto3>=1.28.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'parameter-sync = parameter_sync.cli:program.run',
        ],
        'pytest11': [
            'parameter_sync.pytest_plugin = parameter_sync.pytest_plugin',
        ],
    },
)
