# app/core/typesense_client.py
import logging

import typesense
from typesense.exceptions import ObjectNotFound, TypesenseClientError

from app.core.config import Settings

logger = logging.getLogger(__name__)

DESIGNERS_COLLECTION = "designers"
CONTRACTORS_COLLECTION = "contractors"

DESIGNER_SCHEMA = {
    "name": DESIGNERS_COLLECTION,
    "fields": [
        {"name": "id", "type": "string"},
        {"name": "userId", "type": "string"},
        {"name": "name", "type": "string"},
        {"name": "firmName", "type": "string", "optional": True},
        {"name": "bio", "type": "string", "optional": True},
        {"name": "profilePictureUrl", "type": "string", "optional": True},
        {"name": "portfolioImages", "type": "string[]", "optional": True},
        {"name": "services", "type": "string[]", "optional": True},
        {"name": "serviceCities", "type": "string[]", "optional": True, "facet": True},
        {"name": "styles", "type": "string[]", "optional": True, "facet": True},
        {"name": "priceRangeMin", "type": "int32", "optional": True},
        {"name": "priceRangeMax", "type": "int32", "optional": True},
        {"name": "experienceYears", "type": "int32", "optional": True},
        {"name": "projectsCompleted", "type": "int32", "optional": True},
        {"name": "isVerified", "type": "bool"},
        {"name": "createdAt", "type": "int64"},
    ],
    "default_sorting_field": "createdAt",
}

CONTRACTOR_SCHEMA = {
    "name": CONTRACTORS_COLLECTION,
    "fields": [
        {"name": "id", "type": "string"},
        {"name": "userId", "type": "string"},
        {"name": "name", "type": "string"},
        {"name": "profilePictureUrl", "type": "string", "optional": True},
        {"name": "trades", "type": "string[]", "optional": True, "facet": True},
        {"name": "experienceYears", "type": "int32", "optional": True},
        {"name": "serviceAreas", "type": "string[]", "optional": True, "facet": True},
        {"name": "workPhotos", "type": "string[]", "optional": True},
        {"name": "bio", "type": "string", "optional": True},
        {"name": "isVerified", "type": "bool"},
        {"name": "createdAt", "type": "int64"},
    ],
    "default_sorting_field": "createdAt",
}


def create_typesense_client(settings: Settings) -> typesense.Client:
    return typesense.Client(
        {
            "nodes": [
                {
                    "host": settings.TYPESENSE_HOST,
                    "port": settings.TYPESENSE_PORT,
                    "protocol": settings.TYPESENSE_PROTOCOL,
                }
            ],
            "api_key": settings.TYPESENSE_API_KEY,
            "connection_timeout_seconds": 5,
            "retry_interval_seconds": 0.1,
            "num_retries": 3,
        }
    )


def init_collections(client: typesense.Client) -> None:
    """
    Create the designers / contractors collections if missing.

    Search is optional: failures are logged and startup continues.
    """
    for schema in (DESIGNER_SCHEMA, CONTRACTOR_SCHEMA):
        name = schema["name"]
        try:
            try:
                client.collections[name].retrieve()
                logger.info("Typesense collection %s already exists", name)
            except ObjectNotFound:
                client.collections.create(schema)
                logger.info("Created Typesense collection %s", name)
        except (TypesenseClientError, OSError) as e:
            logger.error("Failed to initialize Typesense collection %s: %s", name, e)
