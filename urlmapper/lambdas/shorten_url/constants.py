# Event codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_URL = 'INVALID_URL'
INVALID_TTL = 'INVALID_TTL'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
