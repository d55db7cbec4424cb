"""Client-facing messages for key operations."""

KEY_NOT_EXIST = "Key with this name does not exist."
NEW_KEY_NAME_EXIST = "New key name is already in use."
SCAN_PER_KEY_TYPE_NOT_SUPPORT = "Filtering per Key types is available for Redis databases v. 6.0 or later."
INVALID_CLUSTER_CURSOR = "Invalid cluster cursor."
NO_PERMISSION = "Insufficient permissions for this operation."
STORE_ERROR = "The data store failed to execute the command."
