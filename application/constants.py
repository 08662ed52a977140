"""Application-level constants."""

# Success messages for /transform/send
FORWARDED_MESSAGE = "Concordance record forwarded to writer"
DELETED_MESSAGE = "Concordance record successfully deleted"
NOT_FOUND_MESSAGE = "Concordance record not found"

# Writer status codes the dispatcher treats as success
WRITE_SUCCESS_CODES = frozenset({200, 201})
DELETE_REMOVED_CODE = 204
DELETE_MISSING_CODE = 404

# Transaction ids generated when the caller did not supply one
TRANSACTION_ID_PREFIX = "tid_"
TRANSACTION_ID_RANDOM_LENGTH = 10

# Health checks
HEALTH_SCHEMA_VERSION = 1
WRITER_CHECK_ID = "check-connectivity-to-concordances-rw"
CONSUMER_CHECK_ID = "check-connectivity-to-kafka"
BUSINESS_IMPACT = "Editorial updates of concept concordances will not be written into UPP"
