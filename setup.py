from setuptools import setup

setup(
    name='osmrest',
    version='0.1.0',
    packages=['osmrest'],
    description='Thin client for the OpenStreetMap 0.6 editing API.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    keywords = ['osm', 'openstreetmap', 'api', 'changeset', 'geojson'],
    python_requires='>=3.7',
    install_requires=[
        'lxml',
        'requests',
        'shapely>=2.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
