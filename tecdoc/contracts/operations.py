"""Service operation names, as published by the catalog web service."""

ARTICLE_SEARCH = "getArticleDirectSearchAllNumbers2"
ASSIGNED_ARTICLE = "getAssignedArticlesByIds2Single"
ARTICLE_DOCUMENTS = "getArticleDocuments"
ARTICLE_THUMBNAILS = "getThumbnailByArticleId"
ARTICLE_LINKED_MANUFACTURERS = "getArticleLinkedAllLinkingTargetManufacturer"
ARTICLE_LINKED_TARGETS = "getArticleLinkedAllLinkingTarget2"
BRANDS = "getAmBrands"
LANGUAGES = "getLanguages"
VEHICLE_MANUFACTURERS = "getVehicleManufacturers3"
VEHICLE_MODELS = "getVehicleModels3"
VEHICLES_BY_IDS = "getVehicleByIds2"

# Linking target types
PASSENGER_CAR = "C"
UNIVERSAL = "U"

# Maximum number of ids the service accepts per call
MAX_IDS_PER_CALL = 25
