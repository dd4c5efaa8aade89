from enum import Enum


# Wire names of the persisted document fields
ACCOUNT_FIELD = "accountName"
TOKEN_FIELD = "token"

# Claim carrying the expiry (unix seconds) in the token payload
EXPIRY_CLAIM = "exp"

VALID_UNTIL_FORMAT = "%Y-%m-%d %H:%M:%S"


class StorageBackend(Enum):
    FILE = "file"
    MEMORY = "memory"
    MONGO = "mongo"
