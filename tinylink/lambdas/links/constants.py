# Structured log event names
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
REDIRECT_FALLBACK = 'REDIRECT_FALLBACK'
SHORTCODE_NOT_FOUND = 'SHORTCODE_NOT_FOUND'
LOOKUP_FAILED = 'LOOKUP_FAILED'
LINK_CREATED = 'LINK_CREATED'
LINK_CREATION_FAILED = 'LINK_CREATION_FAILED'
INVALID_REQUEST = 'INVALID_REQUEST'
METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'
