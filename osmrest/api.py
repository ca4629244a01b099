import base64

import requests

from osmrest.model import Request
from osmrest.parsing import xml_to_object, as_list
from osmrest.settings import Settings
from osmrest.shapeify import object_to_geojson
from osmrest.transport import BasicAuthTransport, OAuthTransport, request_headers


class Api(object):
    """Client for the OSM 0.6 API.

    Reads of public data (map, notes, elements) go straight to the server.
    Anything that needs a user (changesets, preferences, writes) goes
    through ``xhr``, which uses the OAuth handle when one is set and
    Basic-Auth from the stored credentials otherwise.
    """

    CREATED_BY = 'Angular-OSM'

    def __init__(self, url='https://api.openstreetmap.org/api', settings=None, session=None):
        self.url = url
        self.settings = settings if settings is not None else Settings()
        self.session = session or requests.Session()
        self._oauth = None
        self._transport = BasicAuthTransport(self.url, self.get_authorization, self.session)

    ## Credentials

    def validate_credentials(self):
        """Check the stored credentials against /user/details.

        Remembers the user's id and returns True if the server knows them.
        """
        data = self.get_user_details()
        user = (data.get('osm') or {}).get('user') if data else None
        if user is not None:
            self.settings.set_user_id(user.get('_id'))
        return user is not None

    def set_credentials(self, username, password):
        self.settings.set_username(username)
        credentials = base64.b64encode('{}:{}'.format(username, password).encode('utf-8')).decode('ascii')
        self.settings.set_credentials(credentials)
        return credentials

    def get_credentials(self):
        return self.settings.get_credentials()

    def get_authorization(self):
        return 'Basic ' + (self.settings.get_credentials() or '')

    def clear_credentials(self):
        self.settings.set_credentials('')

    def set_oauth(self, oauth):
        self._oauth = oauth
        if oauth is None:
            self._transport = BasicAuthTransport(self.url, self.get_authorization, self.session)
        else:
            self._transport = OAuthTransport(oauth)

    def get_oauth(self):
        return self._oauth

    ## Calling the server

    def xhr(self, request):
        """Send a Request through the current transport and return the
        converted response."""
        return self._transport.send(request)

    def _request(self, method, path, body=None, config=None):
        config = config or {}
        return Request(
            method,
            path,
            body,
            dict(config['params']) if config.get('params') else None,
            dict(config['headers']) if config.get('headers') else None,
        )

    def get_authenticated(self, path, config=None):
        return self.xhr(self._request('GET', path, config=config))

    def get(self, path, config=None):
        """Unauthenticated GET, never routed through OAuth."""
        request = self._request('GET', path, config=config)
        response = self.session.get(self.url + path, params=request.params, headers=request_headers(request))
        response.raise_for_status()
        return xml_to_object(response.content)

    def put(self, path, content=None, config=None):
        return self.xhr(self._request('PUT', path, content, config))

    def delete(self, path, content=None, config=None):
        return self.xhr(self._request('DELETE', path, content, config))

    ## Changesets

    def create_changeset(self, comment):
        changeset = {'osm': {
            'changeset': {
                'tag': [
                    {'_k': 'created_by', '_v': self.CREATED_BY},
                    {'_k': 'comment', '_v': comment},
                ]
            }
        }}
        data = self.put('/0.6/changeset/create', changeset)
        self.settings.set_changeset(data)
        return data

    def get_last_opened_changeset_id(self):
        """Find the current user's open changeset and make it the active one.

        If the user has several open, the first one the server lists wins.
        Returns None (and forgets the active changeset) if there's none.
        """
        config = {
            'params': {'user': self.settings.get_user_id(), 'open': 'true'}
        }
        data = self.get('/0.6/changesets', config)

        changesets = as_list((data.get('osm') or {}).get('changeset')) if data else []
        if changesets:
            self.settings.set_changeset(changesets[0]['_id'])
            return changesets[0]['_id']

        self.settings.set_changeset()
        return None

    def close_changeset(self):
        changeset = self.settings.get_changeset()
        data = self.put('/0.6/changeset/{}/close'.format(changeset))
        self.settings.set_changeset()
        return data

    def get_changeset(self, changeset_id):
        return self.get('/0.6/changeset/{}'.format(changeset_id))

    def get_changeset_download(self, changeset_id):
        return self.get('/0.6/changeset/{}/download'.format(changeset_id))

    ## Users

    def get_user_by_id(self, user_id):
        return self.get_authenticated('/0.6/user/{}'.format(user_id))

    def get_user_details(self):
        return self.get_authenticated('/0.6/user/details')

    def get_user_preferences(self):
        return self.get_authenticated('/0.6/user/preferences')

    def put_user_preferences(self, key, value):
        return self.put('/0.6/user/preferences/{}'.format(key), value)

    ## Map data

    def get_map(self, bbox):
        """Everything inside bbox, given as "left,bottom,right,top"."""
        return self.get('/0.6/map?bbox=' + bbox)

    def get_map_geojson(self, bbox):
        return object_to_geojson(self.get_map(bbox))

    def get_notes(self, bbox):
        return self.get('/0.6/notes?bbox=' + bbox)

    ## Elements

    def _create_element(self, kind, payload):
        return self.put('/0.6/{}/create'.format(kind), payload)

    def _get_element(self, kind, thing_id, version=None):
        path = '/0.6/{}/{}'.format(kind, thing_id)
        if version:
            path += '/' + str(version)

        return self.get(path)

    def _update_element(self, kind, thing_id, payload):
        return self.put('/0.6/{}/{}'.format(kind, thing_id), payload)

    def _delete_element(self, kind, thing_id, payload=None):
        return self.delete('/0.6/{}/{}'.format(kind, thing_id), payload)

    def _get_elements(self, kind, thing_ids):
        plural_kind = kind + 's'
        path = '/0.6/{}'.format(plural_kind)

        return self.get(path, {'params': {plural_kind: ','.join(str(i) for i in thing_ids)}})

    def _get_element_history(self, kind, thing_id):
        return self.get('/0.6/{}/{}/history'.format(kind, thing_id))

    def create_node(self, node):
        return self._create_element('node', node)

    def get_node(self, node_id, version=None):
        return self._get_element('node', node_id, version)

    def update_node(self, node_id, node):
        return self._update_element('node', node_id, node)

    def delete_node(self, node_id, node=None):
        return self._delete_element('node', node_id, node)

    def get_nodes(self, node_ids):
        return self._get_elements('node', node_ids)

    def get_node_history(self, node_id):
        return self._get_element_history('node', node_id)

    def create_way(self, way):
        return self._create_element('way', way)

    def get_way(self, way_id, version=None):
        return self._get_element('way', way_id, version)

    def update_way(self, way_id, way):
        return self._update_element('way', way_id, way)

    def delete_way(self, way_id, way=None):
        return self._delete_element('way', way_id, way)

    def get_ways(self, way_ids):
        return self._get_elements('way', way_ids)

    def get_way_history(self, way_id):
        return self._get_element_history('way', way_id)

    def create_relation(self, relation):
        return self._create_element('relation', relation)

    def get_relation(self, relation_id, version=None):
        return self._get_element('relation', relation_id, version)

    def update_relation(self, relation_id, relation):
        return self._update_element('relation', relation_id, relation)

    def delete_relation(self, relation_id, relation=None):
        return self._delete_element('relation', relation_id, relation)

    def get_relations(self, relation_ids):
        return self._get_elements('relation', relation_ids)

    def get_relation_history(self, relation_id):
        return self._get_element_history('relation', relation_id)
