import logging

from pymongo.errors import PyMongoError

from artschool_signup.commonUtils.errors import SignupStoreError
from artschool_signup.models.signupModel import Signup
from artschool_signup.schemas.signupSchema import SignupRecord

logger = logging.getLogger(__name__)


class SignupStoreClient:
    """Writes signups to the hosted ``signups`` collection. One insert, no retry."""

    async def insert_signup(self, record: SignupRecord) -> Signup:
        doc = Signup(**record.model_dump())
        try:
            await doc.insert()
        except PyMongoError as e:
            logger.error(f"Failed to store signup for {record.email}: {str(e)}")
            raise SignupStoreError(str(e)) from e
        logger.info(f"✅ Signup stored for {record.email} (id={doc.id})")
        return doc
