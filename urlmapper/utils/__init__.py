from urlmapper.utils.codec import encode, decode
from urlmapper.utils.anonymizer import anonymize_and_hash
from urlmapper.utils.config import MapperConfig, app_env, app_name, app_prefix, load_config
from urlmapper.utils.helpers import utcnow, get_short_url, client_ip, require_environment, guarantee_500_response
from urlmapper.utils.logging import initialize_logging
from urlmapper.utils.validators import validate_url, validate_ttl_hours


__all__ = [
    'encode',
    'decode',
    'anonymize_and_hash',
    'MapperConfig',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'utcnow',
    'get_short_url',
    'client_ip',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
    'validate_url',
    'validate_ttl_hours',
]
