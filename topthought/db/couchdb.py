import logging

import pycouchdb

from topthought.settings import settings

logger = logging.getLogger(__name__)


def get_couch():
    """
    Create a CouchDB database handle.
    Called at runtime to avoid import-time connections.
    """
    couch = pycouchdb.Server(settings.couchdb_url)
    return couch.database(settings.COUCHDB_DATABASE)


def ensure_database():
    """Create the configured database if the server does not have it yet."""
    couch = pycouchdb.Server(settings.couchdb_url)
    try:
        return couch.database(settings.COUCHDB_DATABASE)
    except pycouchdb.exceptions.NotFound:
        logger.info(f"Creating CouchDB database {settings.COUCHDB_DATABASE}")
        return couch.create(settings.COUCHDB_DATABASE)
