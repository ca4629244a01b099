import logging
import os.path

from osmrest.parsing import readState, writeState

log = logging.getLogger('osmrest.settings')


class Settings(object):
    """Session state shared by an Api: who we are and what we're editing.

    Kept in memory. When ``state_file`` is given the values are read from it
    on creation and written back every time one of them changes, so a
    session survives a restart.
    """

    KEYS = ('user_id', 'username', 'credentials', 'changeset')

    def __init__(self, state_file=None):
        self._state_file = state_file
        self._state = {}

        if state_file and os.path.exists(state_file):
            with open(state_file) as f:
                state = readState(f)
            self._state = dict((k, v) for (k, v) in state.items() if k in self.KEYS and v)
            log.debug("Loaded session state from %s", state_file)

    def _get(self, key):
        return self._state.get(key)

    def _set(self, key, value):
        if value is None:
            self._state.pop(key, None)
        else:
            self._state[key] = str(value)

        if self._state_file:
            with open(self._state_file, 'w') as f:
                writeState(f, self._state)

    def get_user_id(self):
        return self._get('user_id')

    def set_user_id(self, user_id):
        self._set('user_id', user_id)

    def get_username(self):
        return self._get('username')

    def set_username(self, username):
        self._set('username', username)

    def get_credentials(self):
        return self._get('credentials')

    def set_credentials(self, credentials):
        self._set('credentials', credentials)

    def get_changeset(self):
        return self._get('changeset')

    def set_changeset(self, changeset=None):
        self._set('changeset', changeset)
