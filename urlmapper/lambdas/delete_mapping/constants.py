# Event codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_CODE_NOT_FOUND = 'SHORT_CODE_NOT_FOUND'
DELETE_SUCCESS = 'DELETE_SUCCESS'
