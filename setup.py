from setuptools import setup, find_packages

setup(
    name='spdx-jsonld',
    version='0.1.0',
    author='Marc Hadfield',
    author_email='marc@vital.ai',
    description='Schema-driven SPDX 3 JSON-LD graph serializer and deserializer',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    url='https://github.com/vital-ai/spdx-jsonld',
    packages=find_packages(exclude=["test_spdx_jsonld", "test_spdx_jsonld.*"]),
    package_data={
        'spdx_jsonld.schema': ['resources/*.json', 'resources/*.jsonld'],
    },
    include_package_data=True,

    license='Apache License 2.0',
    install_requires=[
        "python-dotenv",
        "rdflib>=7.0.0",
        "pyld>=2.0.3",
        "pydantic>=2.0",
        "PyYAML",
        "jsonschema>=4.18",
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.11',
)
