from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from artschool_signup.models.signupModel import Signup
from .settings import settings


# Call this from within your event loop to get beanie setup.
async def startDB():
    # Create Motor client
    client = AsyncIOMotorClient(settings.MONGO_URI, uuidRepresentation="standard")
    database = client[settings.MONGO_DATABASE]

    await init_beanie(database=database, document_models=[Signup])
