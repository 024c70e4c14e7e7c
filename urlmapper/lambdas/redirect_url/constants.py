# Event codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_CODE_NOT_FOUND = 'SHORT_CODE_NOT_FOUND'
SHORT_CODE_EXPIRED = 'SHORT_CODE_EXPIRED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
