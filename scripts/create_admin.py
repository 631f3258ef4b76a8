import logging

from topthought.db.couchdb import ensure_database
from topthought.repos.admin_repo import CouchAdminRepo
from topthought.services.auth_service import AuthService
from topthought.settings import settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    try:
        couch_db = ensure_database()
        created = AuthService(CouchAdminRepo(couch_db), settings).ensure_admin()
        if created:
            logger.info("Admin account created.")
        else:
            logger.info("Admin account already present or ADMIN_PASSWORD unset.")
    except Exception as e:
        logger.error(f"Admin seeding failed: {e}", exc_info=True)
