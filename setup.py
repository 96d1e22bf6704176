from setuptools import setup, find_packages

setup(
    name='zmongo_workflow',
    version='0.1.0',
    packages=find_packages(include=['zmongo_workflow', 'zmongo_workflow.*']),
    install_requires=[
        'python-dotenv',
        'pymongo',
        'motor',
        'pydantic>=2',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
        ],
    },
    entry_points={
        'console_scripts': [
            'zmongo-workflow=zmongo_workflow.runner:main',
        ],
    },
    include_package_data=True,
    description='Connect, insert, list and look up MongoDB documents with motor.',
    author='CentralFloridaAttorney',
    url='https://github.com/CentralFloridaAttorney/zmongo_retriever',
)
