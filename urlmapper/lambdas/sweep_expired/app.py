import logging
from typing import Any

from urlmapper.sweeper import ExpirySweeper
from urlmapper.dao import create_mapping_dao
from urlmapper.exceptions import UrlMapperError
from urlmapper.dao.exceptions import DAOError
from urlmapper.utils import load_config
from urlmapper.lambdas.sweep_expired.constants import SUCCESS, ERROR


logger = logging.getLogger(__name__)


def response_success(*, deleted: int) -> dict:
    return {
        'status': SUCCESS,
        'deleted': deleted,
        'message': f'Successfully deleted {deleted} expired mappings',
    }


def response_error(*, error: DAOError | UrlMapperError) -> dict:
    return {
        'status': ERROR,
        'message': 'Failed to delete expired mappings',
        'reason': str(error),
        'error': error.__class__.__name__,
    }


def lambda_handler(event: dict, context: Any) -> dict:
    """Delete expired mappings on a schedule

    Triggered by an EventBridge schedule (daily at 03:00 UTC by default).

    Diagnostic responses:
        success:
            status: success
            deleted: <number of deleted mappings>
            message: Successfully deleted <n> expired mappings
        error:
            status: error
            message: Failed to delete expired mappings
            reason: <reason>
            error: <error class name> (e.g. DataStoreError, BadConfigurationError)

    Args:
        event (dict):
            EventBridge event payload.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        dict: sweep summary.

    Example:
        >>> response = lambda_handler({}, None)
        >>> response['status']
        'success'
        >>> response['deleted']
        3
    """
    try:
        config = load_config()
        deleted = ExpirySweeper(create_mapping_dao(config)).sweep()
    except (DAOError, UrlMapperError) as error:
        logger.exception(
            'Failed to delete expired mappings.',
            extra={'event': ERROR, 'reason': str(error), 'error': error.__class__.__name__},
        )
        return response_error(error=error)
    else:
        return response_success(deleted=deleted)
