# Event codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_CODE_NOT_FOUND = 'SHORT_CODE_NOT_FOUND'
STATS_SUCCESS = 'STATS_SUCCESS'
