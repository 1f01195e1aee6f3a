"""Tag domain constants."""

TAG_NAME_MAX_LENGTH = 100

AUTO_TAG_DESCRIPTION = "Auto-created tag"

# Attempts at creating a missing tag before reconciliation gives up.
TAG_CREATE_MAX_RETRIES = 3
