import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """Custom exception handler for consistent API responses"""
    response = exception_handler(exc, context)

    if response is not None:
        custom_response = {
            'success': False,
            'message': 'An error occurred',
            'data': None,
            'errors': []
        }

        if isinstance(response.data, dict):
            if 'detail' in response.data:
                custom_response['message'] = str(response.data['detail'])
            else:
                custom_response['message'] = 'Validation failed'
                custom_response['errors'] = response.data
        elif isinstance(response.data, list):
            custom_response['errors'] = response.data
        else:
            custom_response['message'] = str(response.data)

        view = context.get('view')
        logger.info(
            "API error in %s: status=%s message=%s",
            view.__class__.__name__ if view else None,
            response.status_code,
            custom_response['message'],
        )
        response.data = custom_response

    return response


def api_response(success=True, message='', data=None, errors=None, status=200):
    """Consistent API response format"""
    response_data = {
        'success': success,
        'message': message,
        'data': data if data is not None else {},
        'errors': errors if errors is not None else []
    }
    return Response(response_data, status=status)
