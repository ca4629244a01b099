import logging

from osmrest.api import Api
from osmrest.model import Request
from osmrest.parsing import xml_to_object, dom_to_object, object_to_xml
from osmrest.settings import Settings
from osmrest.shapeify import object_to_geojson
from osmrest.transport import BasicAuthTransport, OAuthTransport

__version__ = '0.1.0'

logging.getLogger('osmrest').addHandler(logging.NullHandler())
